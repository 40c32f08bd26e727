"""Request validation for the generation endpoints.

Every check fails closed and the first violation wins.  Validation runs
before any asset id is allocated or any generation call is made, so a
rejected request leaves no trace and can be retried as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .chain import is_valid_address
from .errors import ValidationError

logger = logging.getLogger(__name__)

MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 1000
MAX_BATCH_SIZE = 5
MAX_VARIATIONS = 5


def _require_address(wallet_address: Any) -> None:
    if not is_valid_address(wallet_address):
        logger.warning(f"Rejected wallet address: {wallet_address!r}")
        raise ValidationError("Invalid wallet address format")


def validate_single(
    prompt: str | None,
    wallet_address: str | None,
    *,
    min_length: int = MIN_PROMPT_LENGTH,
    max_length: int = MAX_PROMPT_LENGTH,
) -> None:
    """Validate a single-asset generation request.

    Args:
        prompt: Prompt text
        wallet_address: Owner wallet address
        min_length: Minimum prompt length (inclusive)
        max_length: Maximum prompt length (inclusive)

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if not prompt or not wallet_address:
        raise ValidationError("Prompt and wallet address are required")

    _require_address(wallet_address)

    if len(prompt) < min_length:
        raise ValidationError(f"Prompt too short (minimum {min_length} characters)")

    if len(prompt) > max_length:
        raise ValidationError(f"Prompt too long (max {max_length} characters)")


def validate_batch(
    prompts: Sequence[str] | None,
    wallet_address: str | None,
    *,
    max_batch_size: int = MAX_BATCH_SIZE,
) -> None:
    """Validate a batch generation request.

    Individual prompts are not length-checked here; a bad prompt fails its
    own item during generation without affecting the rest of the batch.

    Args:
        prompts: Ordered prompt list
        wallet_address: Owner wallet address
        max_batch_size: Maximum number of prompts accepted

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if not isinstance(prompts, (list, tuple)) or len(prompts) == 0:
        raise ValidationError("Prompts array is required and cannot be empty")

    if not all(isinstance(p, str) for p in prompts):
        raise ValidationError("Every prompt must be a string")

    if len(prompts) > max_batch_size:
        raise ValidationError(f"Maximum {max_batch_size} prompts allowed per batch")

    _require_address(wallet_address)


def validate_variation(base_prompt: str | None, wallet_address: str | None) -> None:
    """Validate a variation generation request.

    Args:
        base_prompt: Prompt every variation is derived from
        wallet_address: Owner wallet address

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if not base_prompt or not wallet_address:
        raise ValidationError("Base prompt and wallet address are required")

    _require_address(wallet_address)


def select_variation_styles(
    variation_count: int,
    styles: Sequence[str] | None,
    default_styles: Sequence[str],
    *,
    max_variations: int = MAX_VARIATIONS,
) -> list[str]:
    """Pick the styles a variation request will fan out over.

    Caller-supplied styles win whenever they are given, even as an empty
    list.  The result is the first ``min(variation_count, max_variations,
    len(styles))`` entries, in order.

    Args:
        variation_count: Number of variations requested
        styles: Caller-supplied styles, or None for the defaults
        default_styles: Styles used when the caller supplies none
        max_variations: Hard cap on variations per request

    Returns:
        Ordered list of selected style names
    """
    candidates = list(styles) if styles is not None else list(default_styles)
    count = max(0, min(variation_count, max_variations, len(candidates)))
    return candidates[:count]
