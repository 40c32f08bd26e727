"""Configuration management for the AssetForge generation service.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ASSETFORGE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ASSETFORGE_* prefix)
2. .env file in the project root
3. Default values defined in AssetForgeConfig

Example .env file:
    ASSETFORGE_GENERATION_SERVICE_URL=http://localhost:8080
    ASSETFORGE_GENERATION_MODEL=gemini-2.0-flash-exp
    ASSETFORGE_DATA_DIR=data
    ASSETFORGE_MAX_BATCH_SIZE=5

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time and
serves as the default for the API layer.  The orchestrator never reads the
global directly: it receives a config object at construction, so tests can
pass their own instance.

Usage Example
-------------
    from assetforge.core.config import config

    print(config.generation_model)
    print(config.assets_db)

    # Configuration is immutable after initialization
    # To change values, set environment variables and restart

Generation Limits
-----------------
- min_prompt_length / max_prompt_length: accepted single-asset prompt bounds
- max_batch_size: prompts accepted by one batch request
- max_variations: styles fanned out by one variation request
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_VARIATION_STYLES: tuple[str, ...] = (
    "digital-art",
    "photorealistic",
    "anime",
    "abstract",
    "cyberpunk",
)


class AssetForgeConfig(BaseSettings):
    """Main configuration for the AssetForge generation service.

    Values are loaded from environment variables with the ASSETFORGE_ prefix,
    with fallback to defaults defined here.  The data directory is created if
    it doesn't exist.

    Attributes
    ----------
    Generation Service:
        generation_model : str
            Model identifier recorded on every asset
        generation_service_url : str
            Base URL of the remote image/metadata generation service
        generation_timeout_s : float
            Per-request timeout applied by the HTTP generation client
        image_size : str
            Image size requested from the generation service

    Request Defaults:
        default_style, default_quality, default_asset_type : str
            Used when a request omits the corresponding field
        variation_styles : tuple[str, ...]
            Styles used by variation requests that supply none
        default_variation_count : int
            Variations produced when a request omits variationCount

    Limits:
        min_prompt_length, max_prompt_length : int
            Inclusive single-asset prompt length bounds
        max_batch_size : int
            Maximum prompts per batch request
        max_variations : int
            Maximum styles per variation request

    Insights:
        complexity_word_threshold : int
            Prompts with more words than this are classified "complex"
        fast_generation_threshold_ms : int
            Elapsed time below which a generation is flagged as fast.
            Diagnostic only; the service performs no caching.

    Paths:
        data_dir : Path
            Directory holding the asset store file

    Server Settings:
        server_host, server_port : bind address for uvicorn
        log_level : root logging level for the CLI entry point

    Examples
    --------
        >>> custom_config = AssetForgeConfig(
        ...     generation_service_url="http://gen.internal:9000",
        ...     max_batch_size=3,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ASSETFORGE_",
        case_sensitive=False,
        frozen=True,
    )

    # Generation service
    generation_model: str = Field(
        default="gemini-2.0-flash-exp",
        description="Model identifier recorded on generated assets",
    )
    generation_service_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the remote generation service",
    )
    generation_timeout_s: float = Field(
        default=120.0,
        description="Timeout for a single generation service call, in seconds",
        gt=0,
    )
    image_size: str = Field(default="1024x1024")

    # Request defaults
    default_style: str = Field(default="digital-art")
    default_quality: str = Field(default="high")
    default_asset_type: str = Field(default="artwork")
    variation_styles: tuple[str, ...] = Field(
        default=DEFAULT_VARIATION_STYLES,
        description="Styles used when a variation request supplies none",
    )
    default_variation_count: int = Field(default=3, ge=0)

    # Limits
    min_prompt_length: int = Field(default=5, ge=1)
    max_prompt_length: int = Field(default=1000, ge=1)
    max_batch_size: int = Field(default=5, ge=1)
    max_variations: int = Field(default=5, ge=1)

    # Insights
    complexity_word_threshold: int = Field(default=10, ge=0)
    fast_generation_threshold_ms: int = Field(
        default=1000,
        description="Diagnostic threshold for the fastGeneration flag (not a cache)",
        ge=0,
    )

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the asset store",
    )

    # Server settings
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=3001, ge=1024, le=65535)
    log_level: str = Field(default="INFO")

    def __init__(self, **kwargs):
        """Initialize configuration and create the data directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def assets_db(self) -> Path:
        """Path to the JSON asset store."""
        return self.data_dir / "assets.json"


# Global configuration instance
# Loads values from environment variables (ASSETFORGE_* prefix) and .env file.
config = AssetForgeConfig()
