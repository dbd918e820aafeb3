from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any

from karaoke_lyrics.lrc.dialects import strip_char_tuples
from karaoke_lyrics.lrc.model import CharToken, LyricBundle, LyricLine
from karaoke_lyrics.lrc.timefmt import format_tag_time
from karaoke_lyrics.text import decode_name

from .cipher import decipher
from .inflate import inflate, inflate_sync
from .tokens import CharTuple, LineTag, Token, split_lines, tokenize

logger = logging.getLogger(__name__)

_HEAD_RE = re.compile(r".*\[id:\$\w+\]\n")  # first line only
_LANGUAGE_RE = re.compile(r"\[language:([\w=\\/+-]+)\]")
_LANGUAGE_LINE_RE = re.compile(r"\[language:[\w=\\/+-]+\]\n?")

ROMANIZATION = 0
TRANSLATION = 1

SideChannel = list[Any]


def _decode_language(payload: str) -> tuple[SideChannel | None, SideChannel | None]:
    """
    `[language:...]` payload -> (romanization, translation) line arrays.

    Accepts url-safe or standard alphabet, with or without padding.
    Anything undecodable is logged and treated as absent.
    """
    cleaned = payload.replace("\\", "").replace("-", "+").replace("_", "/").rstrip("=")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        data = json.loads(base64.b64decode(cleaned).decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        logger.debug("Ignoring undecodable language tag: %s", e)
        return None, None

    roma: SideChannel | None = None
    trans: SideChannel | None = None
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list):
        logger.debug("Ignoring language tag without a content list")
        return None, None
    for item in content:
        if not isinstance(item, dict) or not isinstance(item.get("lyricContent"), list):
            continue
        if item.get("type") == ROMANIZATION:
            roma = item["lyricContent"]
        elif item.get("type") == TRANSLATION:
            trans = item["lyricContent"]
    return roma, trans


def _fragments(side: SideChannel, i: int) -> str:
    if i >= len(side):
        return ""
    entry = side[i]
    if entry is None:
        return ""
    if isinstance(entry, list):
        return "".join(str(f) for f in entry)
    return str(entry)


def _prepare(text: str) -> tuple[str, SideChannel | None, SideChannel | None]:
    text = text.replace("\r", "")
    head = _HEAD_RE.match(text)
    if head:
        text = text[head.end() :]
    m = _LANGUAGE_RE.search(text)
    if not m:
        return text, None, None
    text = _LANGUAGE_LINE_RE.sub("", text, count=1)
    roma, trans = _decode_language(m.group(1))
    return text, roma, trans


def _keep(s: str | None) -> str:
    return s or ""


def _line_head(line: list[Token]) -> LineTag | None:
    return next((tok for tok in line if isinstance(tok, LineTag)), None)


def _side_lines(side: SideChannel, stamps: list[str]) -> str:
    out = [f"[{stamp}]{_fragments(side, i)}" for i, stamp in enumerate(stamps)]
    # entries past the last lyric line have no timestamp to borrow
    out.extend(_fragments(side, i) for i in range(len(stamps), len(side)))
    return "\n".join(out)


def parse_container(text: str, *, decode_entities: bool = True) -> LyricBundle:
    """
    Inflated KRC text -> LyricBundle.

    Lenient: unknown lines are kept as is, a missing or broken language tag
    gives empty translation/romanization streams.
    """
    text, roma, trans = _prepare(text)
    names = decode_name if decode_entities else _keep

    out_lines: list[str] = []
    stamps: list[str] = []
    for line in split_lines(tokenize(text)):
        head = _line_head(line)
        if head is not None:
            stamps.append(format_tag_time(head.start_ms))
        out_lines.append("".join(tok.render() for tok in line))

    if not stamps:
        logger.debug("No [start,duration] lines found in container text")

    crlyric = names("\n".join(out_lines))
    return LyricBundle(
        lyric=strip_char_tuples(crlyric),
        tlyric=names(_side_lines(trans, stamps)) if trans is not None else "",
        rlyric=names(_side_lines(roma, stamps)) if roma is not None else "",
        crlyric=crlyric,
    )


def _line_tokens(head: LineTag, rest: list[Token]) -> tuple[CharToken, ...]:
    # KRC puts the tuple before its text: <a,b,c>text
    out: list[CharToken] = []
    lead: list[str] = []
    current: CharTuple | None = None
    buf: list[str] = []

    def flush() -> None:
        if current is not None:
            out.append(
                CharToken(
                    start_ms=head.start_ms + current.start_ms,
                    duration_ms=current.duration_ms,
                    param=current.param,
                    text=decode_name("".join(buf)),
                )
            )

    for tok in rest:
        if isinstance(tok, CharTuple):
            flush()
            current = tok
            buf = []
        elif current is None:
            lead.append(tok.render())
        else:
            buf.append(tok.render())
    flush()

    lead_text = decode_name("".join(lead))
    if not out:
        return (CharToken(head.start_ms, head.duration_ms, 0, lead_text),)
    if lead_text:
        out.insert(0, CharToken(head.start_ms, 0, 0, lead_text))
    return tuple(out)


def parse_lines(text: str) -> list[LyricLine]:
    """Inflated KRC text -> lines with absolute per-character start times."""
    text, _roma, _trans = _prepare(text)
    lines: list[LyricLine] = []
    for line in split_lines(tokenize(text)):
        head = _line_head(line)
        if head is None:
            continue
        rest = line[line.index(head) + 1 :]
        lines.append(
            LyricLine(
                index=len(lines),
                start_ms=head.start_ms,
                duration_ms=head.duration_ms,
                tokens=_line_tokens(head, rest),
            )
        )
    return lines


async def decode_container(raw: str, *, decode_entities: bool = True) -> LyricBundle:
    """
    base64 KRC container -> LyricBundle.

    Raises InvalidBase64 / InflateFailed (both DecodeError). An empty
    container is "no lyric", not an error.
    """
    if not raw:
        return LyricBundle.empty()
    text = await inflate(decipher(raw))
    return parse_container(text, decode_entities=decode_entities)


def decode_container_sync(raw: str, *, decode_entities: bool = True) -> LyricBundle:
    if not raw:
        return LyricBundle.empty()
    return parse_container(inflate_sync(decipher(raw)), decode_entities=decode_entities)
