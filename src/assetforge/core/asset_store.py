"""Asset persistence for the AssetForge service.

The orchestrator only needs one operation from its store: ``save``.  This
module defines that contract and a file-backed implementation.

The file store is intentionally simple:

- every asset lives in a single ``assets.json`` file
- records are appended in creation order and never rewritten
- reads for display treat a missing or unreadable file as an empty store
- saves refuse to touch a file they cannot parse

Writes go to a temporary file in the same directory and replace the store
with ``os.replace``, so a crash mid-write leaves the previous file intact.
Saves are serialised with a lock because the read-modify-write cycle on the
JSON file is not atomic on its own.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from tempfile import NamedTemporaryFile

from .errors import PersistenceError
from .models import Asset

logger = logging.getLogger(__name__)


class AssetStore(ABC):
    """Persistence collaborator used by the orchestrator."""

    @abstractmethod
    def save(self, asset: Asset) -> None:
        """Persist a newly created asset.

        Raises
        ------
        PersistenceError
            If the asset could not be stored
        """
        pass


class JsonAssetStore(AssetStore):
    """Store assets as a JSON list in a single file.

    Args:
        path: Path to ``assets.json``.  Parent directories are created.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        logger.info(f"Initialized asset store at {self.path}")

    def _read_entries(self) -> list[dict]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as handle:
                raw_entries = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read asset store {self.path}: {e}")
            return []

        if not isinstance(raw_entries, list):
            return []

        return [entry for entry in raw_entries if isinstance(entry, dict)]

    def _read_existing(self) -> list:
        """Return the stored list exactly as written, for appending.

        Raises:
            PersistenceError: If the file exists but is not a JSON list
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as handle:
                raw_entries = json.load(handle)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Asset store {self.path} is unreadable: {e}") from e

        if not isinstance(raw_entries, list):
            raise PersistenceError(f"Asset store {self.path} does not hold a list")

        return raw_entries

    def _write_entries(self, entries: list) -> None:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            try:
                json.dump(entries, tmp, indent=2)
            except BaseException:
                tmp.close()
                os.unlink(tmp_path)
                raise

        try:
            os.replace(tmp_path, self.path)
        except OSError:
            os.unlink(tmp_path)
            raise

    def load_assets(self) -> list[Asset]:
        """Load every stored asset in creation order.

        Entries that no longer validate as assets are skipped.

        Returns:
            List of stored assets
        """
        assets: list[Asset] = []
        for entry in self._read_entries():
            try:
                assets.append(Asset.model_validate(entry))
            except ValueError:
                logger.warning(f"Skipping malformed asset entry: {entry.get('assetId')}")
        return assets

    def save(self, asset: Asset) -> None:
        """Append *asset* to the store file.

        Existing records are carried over untouched.  If the current file
        cannot be parsed the save is refused rather than overwriting it.

        Args:
            asset: Asset to persist

        Raises:
            PersistenceError: If the store is unreadable or cannot be written
        """
        with self._lock:
            try:
                entries = self._read_existing()
            except PersistenceError as e:
                raise PersistenceError(f"Failed to save asset {asset.asset_id}: {e}") from e
            entries.append(asset.model_dump(mode="json", by_alias=True))

            try:
                self._write_entries(entries)
            except OSError as e:
                raise PersistenceError(f"Failed to save asset {asset.asset_id}: {e}") from e

        logger.info(f"Saved asset {asset.asset_id} for {asset.owner_address}")
