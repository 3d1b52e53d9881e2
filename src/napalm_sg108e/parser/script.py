"""Inline-script scraping helpers shared across all page parsers.

The TL-SG108E web UI embeds its state as JavaScript object literals in the
first ``<script>`` block of each ``*Rpm.htm`` page::

    var max_port_num = 8;
    var all_info = {
      state: [1, 1, 1, 1, 1, 1, 1, 1, 0, 0],
      spd_cfg: [1, 1, 1, 1, 1, 1, 1, 1, 0, 0],
      ...
    };

These are not valid JSON (bare keys, hex literals, single quotes), so values
are pulled out with a small fixed grammar instead of a parser.  The grammar is
deliberately flat: tags do not nest, and the first value shape that matches
after ``name:`` wins.  None of the functions raise on unmatched input; they
return ``None`` and leave it to the caller to treat the field as missing.
"""

from __future__ import annotations

import re

# Value shapes tried after "<name>:", in priority order.  The number shape may
# match empty, in which case the capture is falsy and no value is returned.
_STRING: str = r"'([^']*)'"
_BOOLEAN: str = r"\b(true|false)\b"
_NUMBER: str = r"\b(\d+\.?\d?)?\b"
_LIST: str = r"\[([^\]]*)\]"
_DICT: str = r"\{([^}]*)\}"

_RAW_GROUPS: frozenset[int] = frozenset({4, 5})


def extract_tag_content(document: str, tag: str, n: int = 0) -> str | None:
    """Return the text between the *n*-th ``<tag>`` and the next ``</tag>``.

    Matching is case-insensitive and spans newlines.  Only bare opening tags
    (``<script>``, not ``<script type=...>``) are recognised.

    Args:
        document: Raw HTML of the page.
        tag: Tag name, e.g. ``"script"``.
        n: 0-based occurrence index.

    Returns:
        The inner text, or ``None`` if fewer than ``n + 1`` blocks exist.
    """
    pattern = re.compile(
        "<" + re.escape(tag) + r">([\s\S]*?)</" + re.escape(tag) + ">",
        re.IGNORECASE,
    )
    matches = pattern.findall(document)
    if n < 0 or len(matches) <= n:
        return None
    return matches[n]


def extract_variable(script: str, name: str) -> str | None:
    """Return the trimmed value of a ``name = value;`` statement.

    The value ends at the first ``;`` after the ``=``.
    """
    m = re.search(re.escape(name) + r"\s*=([\s\S]*?);", script)
    if m is None:
        return None
    return m.group(1).strip()


def extract_attribute(script: str, name: str) -> str | None:
    """Return the value bound to ``name:`` inside an object literal.

    Quoted strings, booleans and numbers come back unquoted; lists and dicts
    come back as their raw (trimmed) inner text for the caller to split.

    Args:
        script: Script text, usually from :func:`extract_tag_content`.
        name: Attribute key, e.g. ``"spd_cfg"``.

    Returns:
        The value text, or ``None`` if no shape matched or the match was empty.
    """
    pattern = (
        re.escape(name)
        + r"\s*:\s*(?:"
        + "|".join((_STRING, _BOOLEAN, _NUMBER, _LIST, _DICT))
        + ")"
    )
    m = re.search(pattern, script)
    if m is None:
        return None
    for group in range(1, 6):
        value = m.group(group)
        if value:
            value = value.strip()
            if group not in _RAW_GROUPS:
                value = strip_quotes(value)
            return value
    return None


def strip_quotes(text: str | None) -> str | None:
    """Remove one matching pair of surrounding double or single quotes."""
    if text is None:
        return None
    for quote in ('"', "'"):
        if text.startswith(quote) and text.endswith(quote):
            return text[1:-1]
    return text


def split_list(raw: str | None) -> list[str]:
    """Split raw list text from :func:`extract_attribute` into trimmed items."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",")]
