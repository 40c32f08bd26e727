"""Shared pytest fixtures for AssetForge tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from assetforge.api.main import app, get_orchestrator
from assetforge.core.asset_store import AssetStore, JsonAssetStore
from assetforge.core.config import AssetForgeConfig
from assetforge.core.errors import GenerationError, PersistenceError
from assetforge.core.generation_client import GenerationClientBase
from assetforge.core.models import Asset, GeneratedMetadata
from assetforge.core.orchestrator import AssetOrchestrator

# Lower-case addresses are always valid (no checksum applies).
VALID_ADDRESS = "0x" + "ab" * 20
# EIP-55 reference address with a correct checksum.
CHECKSUM_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class FakeGenerationClient(GenerationClientBase):
    """In-memory generation client that records calls.

    Attributes:
        metadata: Metadata returned for every successful metadata call
        fail_image_prompts: Prompts whose image call raises
        fail_metadata_prompts: Prompts whose metadata call raises
        image_calls: ``(prompt, style, quality)`` tuples in call order
        metadata_calls: ``(prompt, asset_type)`` tuples in call order
    """

    def __init__(self, metadata: GeneratedMetadata | None = None):
        self.metadata = metadata or GeneratedMetadata(name="Fox", traits=[], rarity="rare")
        self.fail_image_prompts: set[str] = set()
        self.fail_metadata_prompts: set[str] = set()
        self.image_calls: list[tuple[str, str, str]] = []
        self.metadata_calls: list[tuple[str, str]] = []

    @property
    def call_count(self) -> int:
        return len(self.image_calls) + len(self.metadata_calls)

    async def generate_image(self, prompt: str, style: str, quality: str) -> str:
        self.image_calls.append((prompt, style, quality))
        if prompt in self.fail_image_prompts:
            raise GenerationError(f"Image generation failed for: {prompt}")
        return f"img://{len(self.image_calls)}"

    async def generate_metadata(self, prompt: str, asset_type: str) -> GeneratedMetadata:
        self.metadata_calls.append((prompt, asset_type))
        if prompt in self.fail_metadata_prompts:
            raise RuntimeError(f"Metadata service unavailable for: {prompt}")
        return self.metadata.model_copy(deep=True)


class FailingAssetStore(AssetStore):
    """Asset store whose saves always fail."""

    def __init__(self):
        self.attempts: list[Asset] = []

    def save(self, asset: Asset) -> None:
        self.attempts.append(asset)
        raise PersistenceError("disk full")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> AssetForgeConfig:
    """Create a test configuration rooted in a temporary directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        AssetForgeConfig instance for testing
    """
    return AssetForgeConfig(
        _env_file=None,
        data_dir=str(temp_dir / "data"),
        generation_service_url="http://generation.test",
    )


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    """Generation client returning ``Fox``/``rare`` metadata."""
    return FakeGenerationClient()


@pytest.fixture
def asset_store(test_config: AssetForgeConfig) -> JsonAssetStore:
    """JSON asset store in the temporary data directory."""
    return JsonAssetStore(test_config.assets_db)


@pytest.fixture
def failing_store() -> FailingAssetStore:
    return FailingAssetStore()


@pytest.fixture
def orchestrator(
    fake_client: FakeGenerationClient,
    asset_store: JsonAssetStore,
    test_config: AssetForgeConfig,
) -> AssetOrchestrator:
    """Orchestrator wired to the fake client and the temporary store."""
    return AssetOrchestrator(fake_client, asset_store, test_config)


@pytest.fixture
def test_client(orchestrator: AssetOrchestrator) -> Generator[TestClient, None, None]:
    """FastAPI TestClient using the test orchestrator.

    The client is not entered as a context manager, so the application
    lifespan (HTTP client, on-disk store) never runs.
    """
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def valid_address() -> str:
    return VALID_ADDRESS
