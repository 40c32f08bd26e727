"""Timing and prompt-analysis helpers for generation responses."""

from __future__ import annotations

import math
import time

from .models import AiInsights, Asset, GenerationInsights, PromptAnalysis


def elapsed_ms(start: float) -> int:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - start) * 1000)


def count_words(prompt: str) -> int:
    """Whitespace-delimited word count."""
    return len(prompt.split())


def classify_complexity(prompt: str, word_threshold: int = 10) -> str:
    """Return ``"complex"`` for prompts above *word_threshold* words, else ``"simple"``."""
    return "complex" if count_words(prompt) > word_threshold else "simple"


def average_ms(total_ms: int, count: int) -> int:
    """Per-item average rounded half up; 0 when *count* is 0."""
    if count <= 0:
        return 0
    return math.floor(total_ms / count + 0.5)


def build_generation_insights(
    asset: Asset,
    execution_time_ms: int,
    *,
    word_threshold: int = 10,
    fast_threshold_ms: int = 1000,
) -> GenerationInsights:
    """Summarise one single-asset generation for the response.

    ``fast_generation`` only reports that the call finished under
    *fast_threshold_ms*; nothing is cached.

    Args:
        asset: The asset that was created
        execution_time_ms: Wall-clock time of the generation calls
        word_threshold: Word count above which a prompt is "complex"
        fast_threshold_ms: Latency threshold for the fast flag

    Returns:
        GenerationInsights for the response body
    """
    params = asset.generation_parameters
    return GenerationInsights(
        execution_time_ms=execution_time_ms,
        fast_generation=execution_time_ms < fast_threshold_ms,
        prompt_analysis=PromptAnalysis(
            length=len(asset.prompt),
            words=count_words(asset.prompt),
            complexity=classify_complexity(asset.prompt, word_threshold),
            style=params.style,
            quality=params.quality,
        ),
        ai_insights=AiInsights(
            estimated_rarity=asset.metadata.rarity,
            trait_count=len(asset.metadata.traits),
            category=params.asset_type,
        ),
    )
