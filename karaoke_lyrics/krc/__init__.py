from .cipher import CIPHER_KEY, decipher, encipher
from .container import decode_container, decode_container_sync, parse_container, parse_lines
from .inflate import inflate, inflate_sync

__all__ = [
    "CIPHER_KEY",
    "decipher",
    "decode_container",
    "decode_container_sync",
    "encipher",
    "inflate",
    "inflate_sync",
    "parse_container",
    "parse_lines",
]
