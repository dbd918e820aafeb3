from __future__ import annotations

import re
from typing import Union

from .dialects import TUPLE3_RE, classify_line, match_standard, strip_annotations
from .model import NewDialectLine, OldDialectLine
from .timefmt import format_centis, format_timestamp

_TEXT_TUPLE3_RE = re.compile(r"([^()]*?)\((\d+),(\d+),(\d+)\)")  # text(a,b,c)
_TEXT_TUPLE2_RE = re.compile(r"([^()]*?)\((\d+),(\d+)\)")  # text(offset,duration)

# verbatim text, or (absolute start ms, text)
Piece = Union[str, tuple[int, str]]


def _split_lines(text: str) -> list[str]:
    return text.replace("\r", "").split("\n")


def _render(base_ms: int, pieces: list[Piece]) -> str:
    # The first fragment inherits the line head when it starts with the line.
    out: list[str] = []
    first = True
    for piece in pieces:
        if isinstance(piece, str):
            out.append(piece)
            continue
        at_ms, text = piece
        if first and at_ms == base_ms:
            out.append(text)
        else:
            out.append(f"<{format_timestamp(at_ms)}>{text}")
        first = False
    return "".join(out)


def _new_pieces(line: NewDialectLine) -> list[Piece] | None:
    body = line.body
    matches = list(TUPLE3_RE.finditer(body))
    if not matches:
        return None

    pieces: list[Piece] = []
    if matches[0].start() == 0:
        # (a,b,c)text: each tuple owns the text up to the next tuple
        for k, m in enumerate(matches):
            end = matches[k + 1].start() if k + 1 < len(matches) else len(body)
            pieces.append((line.start_ms + int(m.group(1)), body[m.end() : end]))
        return pieces

    # text(a,b,c): each tuple owns the text right before it
    pos = 0
    for m in _TEXT_TUPLE3_RE.finditer(body):
        if m.start() > pos:
            pieces.append(body[pos : m.start()])
        pieces.append((line.start_ms + int(m.group(2)), m.group(1)))
        pos = m.end()
    if pos < len(body):
        pieces.append(body[pos:])
    return pieces


def _old_pieces(line: OldDialectLine) -> list[Piece] | None:
    """
    text(offset,duration) fragments. Offsets count from the end of the
    previous fragment, the first one from the line timestamp.
    """
    body = line.body
    pieces: list[Piece] = []
    prev_end = line.start_ms
    pos = 0
    for m in _TEXT_TUPLE2_RE.finditer(body):
        if m.start() > pos:
            pieces.append(body[pos : m.start()])
        start = prev_end + int(m.group(2))
        prev_end = start + int(m.group(3))
        pieces.append((start, m.group(1)))
        pos = m.end()
    if not pieces:
        return None
    if pos < len(body):
        pieces.append(body[pos:])
    return pieces


def enhance_line(line: str) -> str:
    parsed = classify_line(line)
    if isinstance(parsed, NewDialectLine):
        head = f"[{format_timestamp(parsed.start_ms)}]"
        pieces = _new_pieces(parsed)
        if pieces is None:
            return head + parsed.body
        return head + _render(parsed.start_ms, pieces)
    if isinstance(parsed, OldDialectLine):
        pieces = _old_pieces(parsed)
        if pieces is None:
            return line
        return f"[{format_timestamp(parsed.start_ms)}]" + _render(parsed.start_ms, pieces)
    return line


def normalize_to_enhanced(text: str) -> str:
    """
    New ([start,dur] + (a,b,c)) and old ([mm:ss.xx] + text(o,d)) dialects
    -> enhanced LRC with [mm:ss.xxx] heads and <mm:ss.xxx> word tags.

    Blank and unrecognized lines are kept verbatim. Never raises.
    """
    if not text:
        return ""
    out: list[str] = []
    for line in _split_lines(text):
        out.append(line if not line.strip() else enhance_line(line))
    return "\n".join(out)


def standardize_line(line: str) -> str:
    parsed = classify_line(line)
    if isinstance(parsed, NewDialectLine):
        return f"[{format_centis(parsed.start_ms)}]{strip_annotations(parsed.body)}"
    m = match_standard(line)
    if m is None:
        return line
    mm, ss, frac, body = m.groups()
    stamp = f"{mm}:{ss}.{frac.ljust(2, '0')[:2]}" if frac else f"{mm}:{ss}"
    return f"[{stamp}]{strip_annotations(body)}"


def normalize_to_standard(text: str) -> str:
    """
    Raw new/old dialect -> standard [mm:ss.xx]text LRC.

    Literal "\\n" sequences are expanded to line breaks first. Centiseconds
    are truncated and no per-character annotation survives.
    Idempotent; never raises.
    """
    if not text:
        return ""
    # repeat until stable: stripping "\(1,2)n" leaves a new "\n" behind
    while True:
        lines = _split_lines(text.replace("\\n", "\n"))
        out = "\n".join(standardize_line(line) for line in lines)
        if out == text:
            return out
        text = out
