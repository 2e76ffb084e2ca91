"""
JSON file kingdom store.

One file per kingdom, named by kingdom id, in a save directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from kingdom_sim.kingdom.kingdom import Kingdom
from kingdom_sim.storage.interfaces import KingdomStore

logger = logging.getLogger(__name__)

SAVE_FORMAT_VERSION = 1


class JsonKingdomStore(KingdomStore):
    """
    Persists kingdoms as JSON documents.

    Handles:
    - Saving a kingdom to <save_directory>/<id>.json
    - Loading by id or by name
    - Listing and deleting saves
    """

    def __init__(self, save_directory: Optional[Path] = None):
        """
        Args:
            save_directory: Directory for save files. Defaults to ./saves/
        """
        self.save_directory = Path(save_directory) if save_directory else Path("./saves")
        self.save_directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, kingdom_id: str) -> Path:
        return self.save_directory / f"{kingdom_id}.json"

    def _read(self, filepath: Path) -> Optional[dict[str, Any]]:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Could not read save file {filepath}: {e}")
            return None

    def find_by_id(self, kingdom_id: str) -> Optional[Kingdom]:
        filepath = self._path_for(kingdom_id)
        if not filepath.exists():
            return None
        data = self._read(filepath)
        if data is None:
            return None
        return Kingdom.from_dict(data["kingdom"])

    def find_by_name(self, name: str) -> Optional[Kingdom]:
        for filepath in sorted(self.save_directory.glob("*.json")):
            data = self._read(filepath)
            if data and data.get("kingdom", {}).get("name") == name:
                return Kingdom.from_dict(data["kingdom"])
        return None

    def save(self, kingdom: Kingdom) -> None:
        filepath = self._path_for(kingdom.id)
        data = {"version": SAVE_FORMAT_VERSION, "kingdom": kingdom.to_dict()}
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved kingdom {kingdom.name} to: {filepath}")

    def exists(self, kingdom_id: str) -> bool:
        return self._path_for(kingdom_id).exists()

    def list_kingdoms(self) -> list[dict[str, Any]]:
        """Id and name of every readable save, sorted by name."""
        saves = []
        for filepath in self.save_directory.glob("*.json"):
            data = self._read(filepath)
            if not data or "kingdom" not in data:
                continue
            saves.append({
                "filepath": str(filepath),
                "id": data["kingdom"].get("id"),
                "name": data["kingdom"].get("name"),
                "prestige_level": data["kingdom"].get("prestige_level", 0),
            })
        saves.sort(key=lambda s: s["name"] or "")
        return saves

    def delete(self, kingdom_id: str) -> bool:
        filepath = self._path_for(kingdom_id)
        if filepath.exists():
            filepath.unlink()
            logger.info(f"Deleted save file: {filepath}")
            return True
        return False
