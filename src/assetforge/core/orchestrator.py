"""Generation orchestration for single, batch and variation requests.

:class:`AssetOrchestrator` drives the generation service, assembles asset
records and hands them to the asset store.  One instance serves every
request; it holds no per-request state.

Flow per item
-------------
1. Allocate a UUID4 asset id.
2. Request the image and the metadata concurrently and wait for both.
3. Assemble the asset record.
4. Save it.

Failure policy
--------------
- **Single asset**: any failure is fatal and propagates as
  :class:`GenerationError` (or its subclass :class:`PersistenceError`).
  Nothing is saved unless both generation calls succeed.
- **Batch**: each item fails on its own.  The error is recorded with the
  item's index and prompt and the batch moves on to the next item.
- **Variations**: each item fails on its own.  The failure is logged, the
  variation is left out of the results and reported in ``errors``.

Items in a batch or variation request run one after another, so results
and errors keep the index of the request item they belong to.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Sequence

from .assembler import VariationInfo, assemble_asset
from .asset_store import AssetStore
from .config import AssetForgeConfig
from .errors import GenerationError, PersistenceError
from .formatting import average_ms, build_generation_insights, count_words, elapsed_ms
from .generation_client import GenerationClientBase
from .models import (
    Asset,
    BatchAssetSummary,
    BatchItemError,
    BatchResult,
    BatchSummary,
    GenerationParameters,
    GenerationResult,
    SingleAssetResult,
    VariationAssetSummary,
    VariationItemError,
    VariationResult,
    VariationSummary,
)
from .validation import (
    select_variation_styles,
    validate_batch,
    validate_single,
    validate_variation,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_STYLES: tuple[str, ...] = ("digital-art",)
VARIATION_QUALITY = "high"


def enhance_prompt(base_prompt: str, style: str) -> str:
    """Append a style suffix to a base prompt."""
    return f"{base_prompt}, {style} style"


class AssetOrchestrator:
    """Run generation requests against a generation client and an asset store.

    Args:
        client: Image and metadata generation service
        store: Persistence collaborator
        config: Limits, defaults and model identifier
    """

    def __init__(
        self,
        client: GenerationClientBase,
        store: AssetStore,
        config: AssetForgeConfig,
    ) -> None:
        self.client = client
        self.store = store
        self.config = config

    # ------------------------------------------------------------------
    # Per-item building blocks.
    # ------------------------------------------------------------------

    async def _generate(
        self, prompt: str, style: str, quality: str, asset_type: str
    ) -> GenerationResult:
        """Request image and metadata concurrently; both must succeed.

        Both calls are awaited to completion before a failure is raised, so
        nothing from this item is still running once this returns.  The
        image failure wins when both calls fail.
        """
        image_url, metadata = await asyncio.gather(
            self.client.generate_image(prompt, style, quality),
            self.client.generate_metadata(prompt, asset_type),
            return_exceptions=True,
        )

        for outcome in (image_url, metadata):
            if isinstance(outcome, GenerationError):
                raise outcome
            if isinstance(outcome, BaseException):
                raise GenerationError(str(outcome)) from outcome

        return GenerationResult(image_url=image_url, metadata=metadata)

    async def _persist(self, asset: Asset) -> None:
        try:
            await asyncio.to_thread(self.store.save, asset)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save asset {asset.asset_id}: {e}") from e

    def _parameters(
        self, prompt: str, style: str, quality: str, asset_type: str, **extra
    ) -> GenerationParameters:
        return GenerationParameters(
            style=style,
            quality=quality,
            asset_type=asset_type,
            size=self.config.image_size,
            model=self.config.generation_model,
            prompt_tokens=count_words(prompt),
            **extra,
        )

    # ------------------------------------------------------------------
    # Single asset.
    # ------------------------------------------------------------------

    async def generate_asset(
        self,
        prompt: str | None,
        wallet_address: str | None,
        *,
        style: str | None = None,
        quality: str | None = None,
        asset_type: str | None = None,
    ) -> SingleAssetResult:
        """Generate and persist one asset.

        Args:
            prompt: Prompt text
            wallet_address: Owner wallet address
            style: Image style; defaults to ``config.default_style``
            quality: Image quality; defaults to ``config.default_quality``
            asset_type: Metadata category; defaults to ``config.default_asset_type``

        Returns:
            The saved asset plus generation insights

        Raises:
            ValidationError: If the request is invalid (nothing is generated)
            GenerationError: If either generation call fails
            PersistenceError: If the asset cannot be saved
        """
        validate_single(
            prompt,
            wallet_address,
            min_length=self.config.min_prompt_length,
            max_length=self.config.max_prompt_length,
        )
        style = style or self.config.default_style
        quality = quality or self.config.default_quality
        asset_type = asset_type or self.config.default_asset_type

        asset_id = str(uuid.uuid4())
        start = time.perf_counter()
        result = await self._generate(prompt, style, quality, asset_type)
        generation_time_ms = elapsed_ms(start)

        asset = assemble_asset(
            asset_id,
            prompt,
            wallet_address,
            result,
            self._parameters(
                prompt, style, quality, asset_type, generation_time_ms=generation_time_ms
            ),
            generation_model=self.config.generation_model,
        )
        await self._persist(asset)
        logger.info(f"Generated asset {asset_id} in {generation_time_ms}ms")

        return SingleAssetResult(
            asset=asset,
            generation=build_generation_insights(
                asset,
                generation_time_ms,
                word_threshold=self.config.complexity_word_threshold,
                fast_threshold_ms=self.config.fast_generation_threshold_ms,
            ),
        )

    # ------------------------------------------------------------------
    # Batch.
    # ------------------------------------------------------------------

    async def generate_batch(
        self,
        prompts: Sequence[str] | None,
        wallet_address: str | None,
        *,
        styles: Sequence[str] | None = None,
        quality: str | None = None,
    ) -> BatchResult:
        """Generate one asset per prompt, isolating per-item failures.

        Styles are assigned round-robin: item *i* uses
        ``styles[i % len(styles)]``.

        Args:
            prompts: Ordered prompts (1 to ``config.max_batch_size``)
            wallet_address: Owner wallet address
            styles: Styles to cycle through; defaults to ``["digital-art"]``
            quality: Image quality; defaults to ``config.default_quality``

        Returns:
            Successful assets and per-item errors, both in request order

        Raises:
            ValidationError: If the request itself is invalid
        """
        validate_batch(prompts, wallet_address, max_batch_size=self.config.max_batch_size)
        styles = list(styles) if styles else list(DEFAULT_BATCH_STYLES)
        quality = quality or self.config.default_quality
        asset_type = self.config.default_asset_type

        start = time.perf_counter()
        assets: list[BatchAssetSummary] = []
        errors: list[BatchItemError] = []

        for i, prompt in enumerate(prompts):
            style = styles[i % len(styles)]
            try:
                asset_id = str(uuid.uuid4())
                item_start = time.perf_counter()
                result = await self._generate(prompt, style, quality, asset_type)
                asset = assemble_asset(
                    asset_id,
                    prompt,
                    wallet_address,
                    result,
                    self._parameters(
                        prompt,
                        style,
                        quality,
                        asset_type,
                        generation_time_ms=elapsed_ms(item_start),
                        batch_generation=True,
                        batch_index=i,
                    ),
                    generation_model=self.config.generation_model,
                    batch_index=i,
                )
                await self._persist(asset)
            except Exception as e:
                logger.warning(f"Batch item {i} failed: {e}")
                errors.append(BatchItemError(prompt=prompt, error=str(e), index=i))
                continue

            assets.append(
                BatchAssetSummary(
                    asset_id=asset.asset_id,
                    prompt=prompt,
                    image_url=asset.image_url,
                    style=style,
                    metadata=asset.metadata,
                )
            )

        execution_time_ms = elapsed_ms(start)
        logger.info(
            f"Batch finished: {len(assets)}/{len(prompts)} succeeded in {execution_time_ms}ms"
        )

        return BatchResult(
            assets=assets,
            errors=errors,
            summary=BatchSummary(
                total_requested=len(prompts),
                successful=len(assets),
                failed=len(errors),
                execution_time_ms=execution_time_ms,
                average_time_per_asset_ms=average_ms(execution_time_ms, len(prompts)),
            ),
        )

    # ------------------------------------------------------------------
    # Variations.
    # ------------------------------------------------------------------

    async def generate_variations(
        self,
        base_prompt: str | None,
        wallet_address: str | None,
        *,
        variation_count: int | None = None,
        styles: Sequence[str] | None = None,
    ) -> VariationResult:
        """Fan one prompt out across several styles.

        Args:
            base_prompt: Prompt shared by every variation
            wallet_address: Owner wallet address
            variation_count: Variations requested; defaults to
                ``config.default_variation_count``, capped at
                ``config.max_variations`` and the number of styles
            styles: Styles to use; defaults to ``config.variation_styles``

        Returns:
            Produced variations and per-style failures, in style order

        Raises:
            ValidationError: If the request itself is invalid
        """
        validate_variation(base_prompt, wallet_address)
        if variation_count is None:
            variation_count = self.config.default_variation_count
        selected_styles = select_variation_styles(
            variation_count,
            styles,
            self.config.variation_styles,
            max_variations=self.config.max_variations,
        )
        asset_type = self.config.default_asset_type

        start = time.perf_counter()
        variations: list[VariationAssetSummary] = []
        errors: list[VariationItemError] = []

        for i, style in enumerate(selected_styles):
            prompt = enhance_prompt(base_prompt, style)
            try:
                asset_id = str(uuid.uuid4())
                item_start = time.perf_counter()
                result = await self._generate(prompt, style, VARIATION_QUALITY, asset_type)
                asset = assemble_asset(
                    asset_id,
                    prompt,
                    wallet_address,
                    result,
                    self._parameters(
                        prompt,
                        style,
                        VARIATION_QUALITY,
                        asset_type,
                        generation_time_ms=elapsed_ms(item_start),
                        is_variation=True,
                        base_prompt=base_prompt,
                        variation_index=i,
                    ),
                    generation_model=self.config.generation_model,
                    variation=VariationInfo(base_prompt=base_prompt, style=style, index=i),
                )
                await self._persist(asset)
            except Exception as e:
                logger.error(f"Error generating variation {i} ({style}): {e}", exc_info=True)
                errors.append(VariationItemError(index=i, style=style, prompt=prompt, error=str(e)))
                continue

            variations.append(
                VariationAssetSummary(
                    asset_id=asset.asset_id,
                    style=style,
                    image_url=asset.image_url,
                    metadata=asset.metadata,
                    prompt=prompt,
                )
            )

        execution_time_ms = elapsed_ms(start)
        logger.info(
            f"Variations finished: {len(variations)}/{len(selected_styles)} "
            f"produced in {execution_time_ms}ms"
        )

        return VariationResult(
            base_prompt=base_prompt,
            variations=variations,
            errors=errors,
            summary=VariationSummary(
                variations_generated=len(variations),
                styles_used=selected_styles,
                failed=len(errors),
                execution_time_ms=execution_time_ms,
                owner=wallet_address,
            ),
        )
