"""Tests for the base64 transport codec."""

import pytest
from arkora_dm import codec
from arkora_dm.types import InputFormatError


class TestEncode:
    """Encoding raw bytes to padded base64."""

    def test_empty(self) -> None:
        assert codec.encode(b"") == ""
        assert codec.decode("") == b""

    def test_padding(self) -> None:
        assert codec.encode(b"a") == "YQ=="
        assert codec.encode(b"ab") == "YWI="
        assert codec.encode(b"abc") == "YWJj"

    def test_key_and_nonce_lengths(self) -> None:
        """32 bytes encode to 44 chars and 12 bytes to 16 chars."""
        assert len(codec.encode(bytes(32))) == 44
        assert len(codec.encode(bytes(12))) == 16

    def test_round_trip_all_byte_values(self) -> None:
        data = bytes(range(256))
        assert codec.decode(codec.encode(data)) == data


class TestDecode:
    """Strict decoding of base64 text."""

    @pytest.mark.parametrize(
        "text",
        [
            "YQ",  # missing padding
            "YQ=",  # short padding
            "Y===",
            "not base64!!",
            "YW-_",  # URL-safe alphabet
            "YW I=",  # embedded whitespace
            "café",  # non-ASCII
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(InputFormatError):
            codec.decode(text)

    @pytest.mark.parametrize(
        "text",
        [
            "YR==",  # decodes to b"a" with stray trailing bits
            codec.encode(bytes(32))[:-2] + "B=",
        ],
    )
    def test_rejects_non_canonical(self, text: str) -> None:
        with pytest.raises(InputFormatError, match="Non-canonical"):
            codec.decode(text)

    def test_rejects_non_text(self) -> None:
        with pytest.raises(InputFormatError, match="Expected base64 text"):
            codec.decode(b"YQ==")  # type: ignore[arg-type]

    def test_decode_exact(self) -> None:
        assert codec.decode_exact(codec.encode(bytes(12)), 12, "Nonce") == bytes(12)

    def test_decode_exact_wrong_length(self) -> None:
        with pytest.raises(InputFormatError, match="Nonce must be 12 bytes, got 8"):
            codec.decode_exact(codec.encode(bytes(8)), 12, "Nonce")
