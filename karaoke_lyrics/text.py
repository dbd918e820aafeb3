from __future__ import annotations

_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def decode_name(s: str | None) -> str:
    """
    Undo the HTML escaping some providers apply to names and lyric text.

    Only the five entities seen in practice are handled, in a fixed order
    (`&amp;` first, so "&amp;lt;" becomes "&lt;" and then "<").
    """
    if not s:
        return ""
    for ent, ch in _ENTITIES:
        s = s.replace(ent, ch)
    return s
