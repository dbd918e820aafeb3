from .errors import DecodeError, InflateFailed, InvalidBase64
from .krc.container import decode_container, decode_container_sync, parse_container, parse_lines
from .lrc.charify import normalize_to_char_timed
from .lrc.model import CharToken, LyricBundle, LyricLine
from .lrc.normalize import normalize_to_enhanced, normalize_to_standard
from .lrc.timefmt import format_timestamp

__all__ = [
    "CharToken",
    "DecodeError",
    "InflateFailed",
    "InvalidBase64",
    "LyricBundle",
    "LyricLine",
    "decode_container",
    "decode_container_sync",
    "format_timestamp",
    "normalize_to_char_timed",
    "normalize_to_enhanced",
    "normalize_to_standard",
    "parse_container",
    "parse_lines",
]
