from __future__ import annotations

import asyncio
import zlib

import pytest

from karaoke_lyrics.errors import InflateFailed
from karaoke_lyrics.krc.inflate import inflate, inflate_sync


def test_inflate_utf8():
    data = zlib.compress("[1000,500]<0,500,0>你好".encode("utf-8"))
    assert inflate_sync(data) == "[1000,500]<0,500,0>你好"
    assert asyncio.run(inflate(data)) == "[1000,500]<0,500,0>你好"


def test_corrupt_stream_keeps_cause():
    with pytest.raises(InflateFailed) as exc_info:
        inflate_sync(b"definitely not deflate")
    assert isinstance(exc_info.value.__cause__, zlib.error)


def test_corrupt_stream_async():
    with pytest.raises(InflateFailed):
        asyncio.run(inflate(b"\x00\x01\x02"))


def test_invalid_utf8_is_fatal():
    data = zlib.compress(b"[0,1]\xff\xfe")
    with pytest.raises(InflateFailed) as exc_info:
        inflate_sync(data)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
