from __future__ import annotations

import base64

import pytest

from karaoke_lyrics.errors import DecodeError, InvalidBase64
from karaoke_lyrics.krc.cipher import CIPHER_KEY, decipher, encipher, xor_key


class TestDecipher:
    def test_key_is_fixed(self):
        assert isinstance(CIPHER_KEY, bytes)
        assert len(CIPHER_KEY) == 16
        assert CIPHER_KEY == b"@Gaw^2tGQ61-\xce\xd2ni"

    def test_header_is_discarded(self):
        raw = base64.b64encode(b"krc1" + bytes(16)).decode()
        # 0 ^ key == key
        assert decipher(raw) == CIPHER_KEY

    def test_key_wraps_around(self):
        raw = base64.b64encode(b"krc1" + bytes(20)).decode()
        assert decipher(raw) == CIPHER_KEY + CIPHER_KEY[:4]

    def test_xor_involution(self):
        payload = bytes(range(256)) * 3
        assert xor_key(xor_key(payload)) == payload
        assert decipher(encipher(payload)) == payload

    def test_reenciphering_reproduces_payload(self):
        ciphered = bytes(range(40))
        raw = base64.b64encode(b"\x00\x01\x02\x03" + ciphered).decode()
        assert xor_key(decipher(raw)) == ciphered

    def test_empty_input_is_no_lyric(self):
        assert decipher("") == b""

    def test_whitespace_in_payload_is_tolerated(self):
        raw = encipher(b"hello world, hello lyrics")
        wrapped = raw[:8] + "\n" + raw[8:]
        assert decipher(wrapped) == b"hello world, hello lyrics"

    @pytest.mark.parametrize("raw", ["not base64!!", "abc", "@@@@"])
    def test_malformed_base64(self, raw):
        with pytest.raises(InvalidBase64):
            decipher(raw)

    def test_invalid_base64_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            decipher("%%%%")


def test_encipher_rejects_bad_header():
    with pytest.raises(ValueError):
        encipher(b"x", header=b"kr")
