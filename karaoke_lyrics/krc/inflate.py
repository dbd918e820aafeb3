from __future__ import annotations

import asyncio
import zlib

from karaoke_lyrics.errors import InflateFailed


def inflate_sync(data: bytes) -> str:
    try:
        raw = zlib.decompress(data)
    except zlib.error as e:
        raise InflateFailed(f"Inflate failed: {e}") from e
    try:
        # strict, no replacement characters
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InflateFailed(f"Inflated payload is not UTF-8: {e}") from e


async def inflate(data: bytes) -> str:
    return await asyncio.to_thread(inflate_sync, data)
