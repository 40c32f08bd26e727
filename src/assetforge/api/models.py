"""Pydantic request and response models for the AssetForge API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for request parsing, response serialisation, and OpenAPI documentation.
Field names are snake_case in Python and camelCase on the wire.

Request fields that the validator checks (prompt, wallet address, prompt
list) are optional at the schema level so that a missing value produces the
same ``{"success": false, "error": ...}`` message as an empty one.

Models
------
GenerateAssetRequest
    Payload for ``POST /api/generate-asset``.
GenerateBatchRequest
    Payload for ``POST /api/generate-batch``.
GenerateVariationsRequest
    Payload for ``POST /api/generate-variations``.
GenerateAssetResponse, BatchResponse, VariationResponse, ErrorResponse
    Response envelopes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from assetforge.core.models import (
    Asset,
    AssetMetadata,
    BatchResult,
    CamelModel,
    GenerationInsights,
    GenerationParameters,
    VariationResult,
)


class GenerateAssetRequest(CamelModel):
    """Request body for ``POST /api/generate-asset``.

    Attributes:
        prompt: Prompt text (5-1000 characters).
        wallet_address: Owner wallet address.
        style: Image style.  Server default when omitted.
        quality: Image quality.  Server default when omitted.
        asset_type: Metadata category.  Server default when omitted.
    """

    prompt: str | None = Field(default=None, description="Prompt text (5-1000 characters).")
    wallet_address: str | None = Field(default=None, description="Owner wallet address.")
    style: str | None = Field(default=None, description="Image style, e.g. 'digital-art'.")
    quality: str | None = Field(default=None, description="Image quality, e.g. 'high'.")
    asset_type: str | None = Field(default=None, description="Asset category, e.g. 'artwork'.")


class GenerateBatchRequest(CamelModel):
    """Request body for ``POST /api/generate-batch``.

    Attributes:
        prompts: One to five prompts, generated in order.
        wallet_address: Owner wallet address.
        styles: Styles cycled across the prompts.
        quality: Image quality for every item.
    """

    prompts: list[str] | None = Field(default=None, description="Prompts to generate (1-5).")
    wallet_address: str | None = Field(default=None, description="Owner wallet address.")
    styles: list[str] | None = Field(
        default=None,
        description="Styles assigned round-robin; defaults to ['digital-art'].",
    )
    quality: str | None = Field(default=None, description="Image quality for every item.")


class GenerateVariationsRequest(CamelModel):
    """Request body for ``POST /api/generate-variations``.

    Attributes:
        base_prompt: Prompt shared by every variation.
        wallet_address: Owner wallet address.
        variation_count: Number of variations (capped at five).
        styles: Styles to use instead of the default five.
    """

    base_prompt: str | None = Field(default=None, description="Prompt shared by all variations.")
    wallet_address: str | None = Field(default=None, description="Owner wallet address.")
    variation_count: int | None = Field(
        default=None,
        description="Variations to generate; capped at 5 and at the number of styles.",
    )
    styles: list[str] | None = Field(default=None, description="Styles to fan out over.")


class AssetPayload(CamelModel):
    """Asset as returned by ``POST /api/generate-asset``."""

    asset_id: str
    prompt: str
    image_url: str
    owner: str
    metadata: AssetMetadata
    is_minted: bool
    generation_parameters: GenerationParameters

    @classmethod
    def from_asset(cls, asset: Asset) -> AssetPayload:
        return cls(
            asset_id=asset.asset_id,
            prompt=asset.prompt,
            image_url=asset.image_url,
            owner=asset.owner_address,
            metadata=asset.metadata,
            is_minted=asset.is_minted,
            generation_parameters=asset.generation_parameters,
        )


class GenerateAssetResponse(CamelModel):
    success: Literal[True] = True
    asset: AssetPayload
    generation: GenerationInsights


class BatchResponse(CamelModel):
    success: Literal[True] = True
    data: BatchResult


class VariationResponse(CamelModel):
    success: Literal[True] = True
    data: VariationResult


class ErrorResponse(CamelModel):
    success: Literal[False] = False
    error: str
