from __future__ import annotations

import base64
import binascii
import logging

from karaoke_lyrics.errors import InvalidBase64

logger = logging.getLogger(__name__)

CIPHER_KEY = bytes((0x40, 0x47, 0x61, 0x77, 0x5E, 0x32, 0x74, 0x47, 0x51, 0x36, 0x31, 0x2D, 0xCE, 0xD2, 0x6E, 0x69))
HEADER_SIZE = 4
DEFAULT_HEADER = b"krc1"


def xor_key(data: bytes | bytearray) -> bytes:
    """XOR `data` with CIPHER_KEY repeated; applying it twice is a no-op."""
    key_len = len(CIPHER_KEY)
    return bytes(b ^ CIPHER_KEY[i % key_len] for i, b in enumerate(data))


def decipher(raw: str) -> bytes:
    """
    base64 container -> deciphered (still deflated) payload.

    Empty input returns b"" so callers can treat it as "no lyric".
    """
    if not raw:
        return b""
    try:
        buf = base64.b64decode("".join(raw.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64(f"Container is not valid base64: {e}") from e
    if len(buf) <= HEADER_SIZE:
        logger.debug("Container has no payload after the %d byte header", HEADER_SIZE)
    return xor_key(buf[HEADER_SIZE:])


def encipher(payload: bytes, header: bytes = DEFAULT_HEADER) -> str:
    if len(header) != HEADER_SIZE:
        raise ValueError(f"header must be {HEADER_SIZE} bytes")
    return base64.b64encode(header + xor_key(payload)).decode("ascii")
