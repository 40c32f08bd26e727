"""Pydantic models for assets and orchestration results.

Every model serialises with camelCase aliases (``assetId``, ``imageUrl``,
``isMinted`` ...) because that is the JSON shape the HTTP API returns.
Python code reads and writes the snake_case attribute names.

Models
------
Trait, GeneratedMetadata, GenerationResult
    Values produced by the generation service.
AssetMetadata, GenerationParameters, Asset
    The persisted asset record.
SingleAssetResult, BatchResult, VariationResult
    Orchestrator outputs, one per endpoint.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases that also accepts field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Trait(CamelModel):
    """A single ``{type, value}`` attribute of an asset."""

    type: str
    value: str | int | float | bool


class GeneratedMetadata(CamelModel):
    """Descriptive metadata returned by the generation service.

    Every field is optional; the assembler fills in defaults.
    """

    name: str | None = None
    description: str | None = None
    traits: list[Trait] | None = None
    rarity: str | None = None


class GenerationResult(CamelModel):
    """Joined output of one image call and one metadata call."""

    image_url: str
    metadata: GeneratedMetadata


class AssetMetadata(CamelModel):
    """Display metadata stored on an asset.

    ``transaction_hash`` and ``token_id`` belong to the minting subsystem and
    are always created empty.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    traits: list[Trait] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    transaction_hash: str | None = None
    token_id: str | None = None
    ai_generated: bool = True
    generation_model: str
    prompt_hash: str
    rarity: str = "common"
    batch_index: int | None = None
    is_variation: bool = False
    base_prompt: str | None = None
    variation_style: str | None = None
    variation_index: int | None = None


class GenerationParameters(CamelModel):
    """The inputs that produced an asset."""

    model_config = ConfigDict(frozen=True)

    style: str
    quality: str
    asset_type: str
    size: str
    model: str
    generation_time_ms: int | None = None
    prompt_tokens: int | None = None
    batch_generation: bool = False
    batch_index: int | None = None
    is_variation: bool = False
    base_prompt: str | None = None
    variation_index: int | None = None


class Asset(CamelModel):
    """A persisted generation result owned by a wallet address."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    prompt: str
    owner_address: str
    image_url: str
    metadata: AssetMetadata
    generation_parameters: GenerationParameters
    is_minted: bool = False
    mint_tx_hash: str | None = None


# ---------------------------------------------------------------------------
# Single-asset results.
# ---------------------------------------------------------------------------


class PromptAnalysis(CamelModel):
    length: int
    words: int
    complexity: str
    style: str
    quality: str


class AiInsights(CamelModel):
    estimated_rarity: str
    trait_count: int
    category: str


class GenerationInsights(CamelModel):
    """Timing and prompt diagnostics returned with a single asset."""

    execution_time_ms: int
    fast_generation: bool = Field(
        description=(
            "Diagnostic flag: generation finished under the configured latency "
            "threshold.  No caching is performed."
        ),
    )
    prompt_analysis: PromptAnalysis
    ai_insights: AiInsights


class SingleAssetResult(CamelModel):
    asset: Asset
    generation: GenerationInsights


# ---------------------------------------------------------------------------
# Batch results.
# ---------------------------------------------------------------------------


class BatchAssetSummary(CamelModel):
    asset_id: str
    prompt: str
    image_url: str
    style: str
    metadata: AssetMetadata


class BatchItemError(CamelModel):
    """A failed batch item, keyed by its position in the request."""

    prompt: str
    error: str
    index: int


class BatchSummary(CamelModel):
    total_requested: int
    successful: int
    failed: int
    execution_time_ms: int
    average_time_per_asset_ms: int


class BatchResult(CamelModel):
    assets: list[BatchAssetSummary]
    errors: list[BatchItemError]
    summary: BatchSummary


# ---------------------------------------------------------------------------
# Variation results.
# ---------------------------------------------------------------------------


class VariationAssetSummary(CamelModel):
    asset_id: str
    style: str
    image_url: str
    metadata: AssetMetadata
    prompt: str


class VariationItemError(CamelModel):
    """A failed variation, keyed by its position in the selected styles."""

    index: int
    style: str
    prompt: str
    error: str


class VariationSummary(CamelModel):
    variations_generated: int
    styles_used: list[str]
    failed: int
    execution_time_ms: int
    owner: str


class VariationResult(CamelModel):
    base_prompt: str
    variations: list[VariationAssetSummary]
    errors: list[VariationItemError]
    summary: VariationSummary
