"""Generation service clients.

The orchestrator talks to the generation service through
:class:`GenerationClientBase`: one async call for the image, one for the
descriptive metadata.  Each call can fail independently.

:class:`HttpGenerationClient` is the production adapter.  It forwards both
calls to a remote service over HTTP and converts every failure into a
:class:`~assetforge.core.errors.GenerationError`.  It never retries; the
timeout it applies is the only bound on a slow service.

Service contract
----------------
``POST {base_url}/images``
    Body ``{prompt, style, quality, size, model}``; returns ``{"imageUrl": ...}``.
``POST {base_url}/metadata``
    Body ``{prompt, assetType, model}``; returns
    ``{"name", "description", "traits", "rarity"}`` (all optional).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from .config import AssetForgeConfig
from .errors import GenerationError
from .models import GeneratedMetadata

logger = logging.getLogger(__name__)


class GenerationClientBase(ABC):
    """Contract for the image and metadata generation service."""

    @abstractmethod
    async def generate_image(self, prompt: str, style: str, quality: str) -> str:
        """Generate an image for *prompt*.

        Returns
        -------
        str
            Reference (URL or handle) to the generated image
        """
        pass

    @abstractmethod
    async def generate_metadata(self, prompt: str, asset_type: str) -> GeneratedMetadata:
        """Generate name, description, traits and rarity for *prompt*."""
        pass

    async def aclose(self) -> None:
        """Release any held resources.  No-op by default."""
        return None


class HttpGenerationClient(GenerationClientBase):
    """Generation client backed by a remote HTTP service.

    Args:
        config: Service configuration (URL, model, timeout, image size).
        client: Optional pre-built ``httpx.AsyncClient``; one is created
            from *config* when omitted.
    """

    def __init__(self, config: AssetForgeConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.generation_service_url,
            timeout=config.generation_timeout_s,
        )
        logger.info(f"Initialized HTTP generation client for {config.generation_service_url}")

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.post(path, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            raise GenerationError(
                f"Generation service returned {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Generation service request failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Generation service returned invalid JSON for {path}") from e

        if not isinstance(body, dict):
            raise GenerationError(f"Unexpected response body from {path}")
        return body

    async def generate_image(self, prompt: str, style: str, quality: str) -> str:
        body = await self._post(
            "/images",
            {
                "prompt": prompt,
                "style": style,
                "quality": quality,
                "size": self.config.image_size,
                "model": self.config.generation_model,
            },
        )
        image_url = body.get("imageUrl")
        if not image_url or not isinstance(image_url, str):
            raise GenerationError("Generation service returned no image reference")
        return image_url

    async def generate_metadata(self, prompt: str, asset_type: str) -> GeneratedMetadata:
        body = await self._post(
            "/metadata",
            {
                "prompt": prompt,
                "assetType": asset_type,
                "model": self.config.generation_model,
            },
        )
        try:
            return GeneratedMetadata.model_validate(body)
        except PydanticValidationError as e:
            raise GenerationError(f"Generation service returned malformed metadata: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()
