from __future__ import annotations

import re

from .model import NewDialectLine, OldDialectLine, ParsedLine, Unmatched
from .timefmt import parse_timestamp

_NEW_LINE_RE = re.compile(r"^\[(\d+),(\d+)\](.*)$", re.DOTALL)  # [start,duration]body
_OLD_LINE_RE = re.compile(r"^\[((\d+):(\d{2})\.(\d{1,3}))\](.*)$", re.DOTALL)  # [mm:ss.xx]body
_STD_LINE_RE = re.compile(r"^\[(\d+):(\d{2})(?:\.(\d{1,3}))?\](.*)$", re.DOTALL)

TUPLE3_RE = re.compile(r"\((\d+),(\d+),(\d+)\)")
TUPLE2_RE = re.compile(r"\((\d+),(\d+)\)")
_INLINE_TAG_RE = re.compile(r"<\d+:\d{2}\.\d{1,3}>")


def classify_line(line: str) -> ParsedLine:
    m = _NEW_LINE_RE.match(line)
    if m:
        return NewDialectLine(start_ms=int(m.group(1)), duration_ms=int(m.group(2)), body=m.group(3))
    m = _OLD_LINE_RE.match(line)
    if m:
        start = parse_timestamp(m.group(2), m.group(3), m.group(4))
        return OldDialectLine(start_ms=start, timestamp=m.group(1), body=m.group(5))
    return Unmatched(raw=line)


def match_standard(line: str) -> re.Match[str] | None:
    """[mm:ss], [mm:ss.x], [mm:ss.xx] or [mm:ss.xxx] line head."""
    return _STD_LINE_RE.match(line)


def strip_char_tuples(text: str) -> str:
    # (a,b,c) only; repeated so "((1,2,3)1,2,3)" leaves nothing behind
    while True:
        stripped = TUPLE3_RE.sub("", text)
        if stripped == text:
            return text
        text = stripped


def strip_annotations(text: str) -> str:
    """Remove every per-character annotation: (a,b,c), (a,b) and <mm:ss.xxx>."""
    while True:
        stripped = _INLINE_TAG_RE.sub("", TUPLE2_RE.sub("", TUPLE3_RE.sub("", text)))
        if stripped == text:
            return text
        text = stripped
