"""Core generation logic for AssetForge.

This package holds everything below the HTTP layer:

- **config.py**: Pydantic Settings configuration (ASSETFORGE_ prefix)
- **validation.py**: Request shape and bounds checks
- **chain.py**: Wallet address validation and prompt hashing
- **generation_client.py**: Generation service contract and HTTP adapter
- **assembler.py**: Asset record construction
- **asset_store.py**: Persistence contract and JSON file store
- **orchestrator.py**: Single, batch and variation generation flows
- **formatting.py**: Timing and prompt-analysis insights

Usage Example
-------------
    import asyncio

    from assetforge.core import AssetOrchestrator, HttpGenerationClient, JsonAssetStore, config

    orchestrator = AssetOrchestrator(
        HttpGenerationClient(config),
        JsonAssetStore(config.assets_db),
        config,
    )
    result = asyncio.run(
        orchestrator.generate_asset("a red fox in snow", "0x" + "ab" * 20)
    )
"""

from assetforge.core.asset_store import AssetStore, JsonAssetStore
from assetforge.core.config import AssetForgeConfig, config
from assetforge.core.errors import (
    AssetForgeError,
    GenerationError,
    PersistenceError,
    ValidationError,
)
from assetforge.core.generation_client import GenerationClientBase, HttpGenerationClient
from assetforge.core.orchestrator import AssetOrchestrator

__all__ = [
    "AssetForgeConfig",
    "AssetForgeError",
    "AssetOrchestrator",
    "AssetStore",
    "GenerationClientBase",
    "GenerationError",
    "HttpGenerationClient",
    "JsonAssetStore",
    "PersistenceError",
    "ValidationError",
    "config",
]
