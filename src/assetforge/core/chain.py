"""Wallet address and content hash helpers.

Thin wrappers over ``eth-utils`` so the rest of the package never touches
chain primitives directly.
"""

from __future__ import annotations

from typing import Any

from eth_utils import is_address, keccak, to_hex


def is_valid_address(value: Any) -> bool:
    """Check that *value* is a syntactically valid wallet address.

    Accepts 40 hex characters with or without a ``0x`` prefix.  Mixed-case
    addresses must carry a valid EIP-55 checksum.

    Args:
        value: Candidate address.  Non-string values are rejected.

    Returns:
        True if the address is well formed.
    """
    if not isinstance(value, str):
        return False
    return is_address(value)


def normalize_address(address: str) -> str:
    """Return the lower-cased form of *address* used as the owner key."""
    return address.lower()


def prompt_hash(prompt: str) -> str:
    """Keccak-256 digest of the prompt's UTF-8 bytes as ``0x``-prefixed hex."""
    return to_hex(keccak(text=prompt))
