from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class CharToken:
    start_ms: int
    duration_ms: int
    param: int
    text: str


@dataclass(frozen=True, slots=True)
class LyricLine:
    index: int
    start_ms: int
    duration_ms: int
    tokens: tuple[CharToken, ...]

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.tokens)


@dataclass(frozen=True, slots=True)
class LyricBundle:
    """
    Result of decoding a KRC container.

    `lyric` is `crlyric` with the `(start,duration,param)` tuples removed.
    """

    lyric: str
    tlyric: str
    rlyric: str
    crlyric: str

    @classmethod
    def empty(cls) -> LyricBundle:
        return cls(lyric="", tlyric="", rlyric="", crlyric="")

    @property
    def has_lyrics(self) -> bool:
        return bool(self.lyric.strip())


# Per-line parse results for the plain-text dialects.


@dataclass(frozen=True, slots=True)
class NewDialectLine:
    start_ms: int
    duration_ms: int
    body: str


@dataclass(frozen=True, slots=True)
class OldDialectLine:
    start_ms: int
    timestamp: str  # as written, e.g. "00:01.00"
    body: str


@dataclass(frozen=True, slots=True)
class Unmatched:
    raw: str


ParsedLine = Union[NewDialectLine, OldDialectLine, Unmatched]
