"""Unit tests for wallet address and prompt hash helpers."""

import pytest

from assetforge.core.chain import is_valid_address, normalize_address, prompt_hash

CHECKSUM_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class TestIsValidAddress:
    """Tests for is_valid_address."""

    def test_lowercase_address(self):
        assert is_valid_address("0x" + "ab" * 20)

    def test_uppercase_hex_address(self):
        assert is_valid_address("0x" + "AB" * 20)

    def test_checksummed_address(self):
        assert is_valid_address(CHECKSUM_ADDRESS)

    def test_bad_checksum_rejected(self):
        # Same address with one letter's case flipped: still mixed case, wrong checksum.
        bad = "0x5aaeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
        assert not is_valid_address(bad)

    @pytest.mark.parametrize(
        "value",
        ["", "0x", "0x1234", "0x" + "ab" * 21, "0x" + "zz" * 20, None, 12345, ["0x" + "ab" * 20]],
    )
    def test_malformed_values(self, value):
        assert not is_valid_address(value)


class TestNormalizeAddress:
    def test_lowercases(self):
        assert normalize_address(CHECKSUM_ADDRESS) == CHECKSUM_ADDRESS.lower()


class TestPromptHash:
    """Tests for prompt_hash."""

    def test_known_digest(self):
        """Keccak-256 of the empty string is a well-known constant."""
        assert prompt_hash("") == (
            "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_deterministic(self):
        assert prompt_hash("a red fox in snow") == prompt_hash("a red fox in snow")

    def test_different_prompts_differ(self):
        assert prompt_hash("a red fox") != prompt_hash("a red fox.")

    def test_hashes_utf8_bytes(self):
        digest = prompt_hash("café ☕")
        assert digest.startswith("0x")
        assert len(digest) == 66
