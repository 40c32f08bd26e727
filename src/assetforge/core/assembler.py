"""Build asset records from generation output.

Pure transformation: no I/O, and the generation result passed in is never
modified (trait lists are copied before anything is appended).
"""

from __future__ import annotations

from dataclasses import dataclass

from .chain import normalize_address, prompt_hash
from .models import Asset, AssetMetadata, GenerationParameters, GenerationResult, Trait

DEFAULT_RARITY = "common"


@dataclass(frozen=True)
class VariationInfo:
    """Marks an asset as one style variation of a base prompt."""

    base_prompt: str
    style: str
    index: int


def default_asset_name(asset_id: str) -> str:
    """Display name used when the generation service returns none."""
    return f"AI Asset {asset_id[:8]}"


def assemble_asset(
    asset_id: str,
    prompt: str,
    owner_address: str,
    result: GenerationResult,
    parameters: GenerationParameters,
    *,
    generation_model: str,
    batch_index: int | None = None,
    variation: VariationInfo | None = None,
) -> Asset:
    """Create the asset record for one successful generation.

    Args:
        asset_id: Freshly allocated asset id
        prompt: Prompt the asset was generated from (style-enhanced for variations)
        owner_address: Validated wallet address; stored lower-cased
        result: Image reference and generated metadata
        parameters: Generation inputs to record on the asset
        generation_model: Model identifier recorded in the metadata
        batch_index: Position in a batch request, if any
        variation: Variation details, if the asset is a style variation

    Returns:
        New, unminted Asset
    """
    generated = result.metadata
    traits = [trait.model_copy() for trait in (generated.traits or [])]

    if variation is not None:
        name = f"{generated.name or 'AI Variation'} ({variation.style})"
        traits.append(Trait(type="Style", value=variation.style))
    else:
        name = generated.name or default_asset_name(asset_id)

    metadata = AssetMetadata(
        name=name,
        description=generated.description or prompt,
        traits=traits,
        generation_model=generation_model,
        prompt_hash=prompt_hash(prompt),
        rarity=generated.rarity or DEFAULT_RARITY,
        batch_index=batch_index,
        is_variation=variation is not None,
        base_prompt=variation.base_prompt if variation else None,
        variation_style=variation.style if variation else None,
        variation_index=variation.index if variation else None,
    )

    return Asset(
        asset_id=asset_id,
        prompt=prompt,
        owner_address=normalize_address(owner_address),
        image_url=result.image_url,
        metadata=metadata,
        generation_parameters=parameters,
        is_minted=False,
        mint_tx_hash=None,
    )
