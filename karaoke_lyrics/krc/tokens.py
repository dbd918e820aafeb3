from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import regex

_TOKEN_RE = regex.compile(
    r"(?P<line>\[(?P<ls>\d+),(?P<ld>\d+)\])"
    r"|(?P<char><(?P<cs>\d+),(?P<cd>\d+),(?P<cp>\d+)>)"
    r"|(?P<nl>\n)"
)


@dataclass(frozen=True, slots=True)
class LineTag:
    start_ms: int
    duration_ms: int
    raw: str  # "[a,b]" -> "a,b"

    def render(self) -> str:
        return f"[{self.raw}]"


@dataclass(frozen=True, slots=True)
class CharTuple:
    start_ms: int
    duration_ms: int
    param: int
    raw: str  # digits as written, "<a,b,c>" -> "a,b,c"

    def render(self) -> str:
        return f"({self.raw})"


@dataclass(frozen=True, slots=True)
class Text:
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Newline:
    def render(self) -> str:
        return "\n"


Token = Union[LineTag, CharTuple, Text, Newline]


def tokenize(text: str) -> Iterator[Token]:
    pos = 0
    for m in _TOKEN_RE.finditer(text):
        if m.start() > pos:
            yield Text(text[pos : m.start()])
        if m.group("line"):
            yield LineTag(int(m.group("ls")), int(m.group("ld")), m.group("line")[1:-1])
        elif m.group("char"):
            raw = m.group("char")[1:-1]
            yield CharTuple(int(m.group("cs")), int(m.group("cd")), int(m.group("cp")), raw)
        else:
            yield Newline()
        pos = m.end()
    if pos < len(text):
        yield Text(text[pos:])


def split_lines(tokens: Iterator[Token]) -> Iterator[list[Token]]:
    """Group a token stream into lines; Newline tokens are dropped."""
    line: list[Token] = []
    for tok in tokens:
        if isinstance(tok, Newline):
            yield line
            line = []
        else:
            line.append(tok)
    yield line
