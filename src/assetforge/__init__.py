"""AssetForge - AI asset generation service for wallet-owned assets."""

__version__ = "0.1.0"

from assetforge.core.config import AssetForgeConfig, config
from assetforge.core.orchestrator import AssetOrchestrator

__all__ = [
    "AssetForgeConfig",
    "AssetOrchestrator",
    "config",
]
