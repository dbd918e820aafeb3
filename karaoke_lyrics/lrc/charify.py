from __future__ import annotations

import re
from dataclasses import dataclass

from .dialects import TUPLE2_RE, TUPLE3_RE
from .timefmt import parse_timestamp

_OFFSET_RE = re.compile(r"^\[offset:([+-]?\d+)\]$", re.IGNORECASE)
_NEW_HEAD_RE = re.compile(r"\[\d+,\d+\]")
_ENHANCED_LINE_RE = re.compile(r"^\[(\d+):(\d{2})\.(\d{1,3})\](.*)$", re.DOTALL)
_WORD_TAG_RE = re.compile(r"<(\d+):(\d{2})\.(\d{1,3})>([^<]*)")

DEFAULT_LAST_SEGMENT_MS = 1000


@dataclass(frozen=True, slots=True)
class _Segment:
    start_ms: int
    text: str


def _segments(line_start: int, rest: str, offset_ms: int) -> list[_Segment]:
    rest = TUPLE2_RE.sub("", TUPLE3_RE.sub("", rest))
    segs: list[_Segment] = []
    first = _WORD_TAG_RE.search(rest)
    lead = rest[: first.start()] if first else ""
    if lead:
        # untagged text before the first word tag starts with the line
        segs.append(_Segment(line_start, lead))
    for m in _WORD_TAG_RE.finditer(rest):
        if m.group(4):
            segs.append(_Segment(parse_timestamp(m.group(1), m.group(2), m.group(3)) + offset_ms, m.group(4)))
    return segs


def _next_line_start(lines: list[str], i: int, offset_ms: int) -> int | None:
    for nxt in lines[i + 1 :]:
        m = _ENHANCED_LINE_RE.match(nxt)
        if m:
            return parse_timestamp(m.group(1), m.group(2), m.group(3)) + offset_ms
        skip = nxt.strip()
        if not skip or skip.lower().startswith("[offset:"):
            continue
        return None
    return None


def _tokens(line_start: int, segs: list[_Segment], next_line_start: int | None) -> str:
    out: list[str] = []
    for k, cur in enumerate(segs):
        if k < len(segs) - 1:
            next_start = segs[k + 1].start_ms
        elif next_line_start is not None:
            next_start = next_line_start
        else:
            next_start = cur.start_ms + DEFAULT_LAST_SEGMENT_MS
        span = max(1, next_start - cur.start_ms)
        chars = list(cur.text)
        per = max(1, span // len(chars))
        for c, ch in enumerate(chars):
            cs = cur.start_ms + c * per
            if len(chars) == 1:
                cd = span
            elif c == len(chars) - 1:
                cd = max(1, next_start - cs)
            else:
                cd = per
            out.append(f"({max(0, cs - line_start)},{cd},0){ch}")
    return "".join(out)


def normalize_to_char_timed(text: str) -> str:
    """
    Enhanced LRC ([mm:ss.xxx] + <mm:ss.xxx>word) -> [start,dur](a,b,0)c lines.

    Tuple starts are relative to the line start, as in decoded KRC text.
    Each word's time is spread evenly over its characters; a word lasts
    until the next word, the next timed line, or one second.
    [offset:+/-ms] applies to the lines after it and is kept in the output.
    """
    if not text:
        return ""
    lines = text.replace("\r", "").split("\n")
    offset_ms = 0
    out: list[str] = []
    for i, line in enumerate(lines):
        if not line.strip():
            out.append(line)
            continue

        off = _OFFSET_RE.match(line.strip())
        if off:
            offset_ms = int(off.group(1))
            out.append(line)
            continue

        if _NEW_HEAD_RE.search(line) and TUPLE3_RE.search(line):
            out.append(line)
            continue

        m = _ENHANCED_LINE_RE.match(line)
        if not m:
            out.append(line)
            continue

        line_start = parse_timestamp(m.group(1), m.group(2), m.group(3)) + offset_ms
        segs = _segments(line_start, m.group(4), offset_ms)
        if not segs:
            out.append(line)
            continue

        next_line_start = _next_line_start(lines, i, offset_ms)
        line_start = max(0, line_start)
        line_end = next_line_start if next_line_start is not None else segs[-1].start_ms + DEFAULT_LAST_SEGMENT_MS
        out.append(f"[{line_start},{max(0, line_end - line_start)}]" + _tokens(line_start, segs, next_line_start))
    return "\n".join(out)
