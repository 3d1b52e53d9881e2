"""NAPALM driver for TP-Link TL-SG108E easy smart switches."""

from napalm_sg108e.driver import SG108EDriver

__all__ = ["SG108EDriver"]
