"""JSON file weight store."""

from __future__ import annotations

import json
from pathlib import Path

from ..logging import get_logger
from ..schemas.weights import WeightConfig


class FileWeightStore:
    """Persist weights as a small JSON document on disk."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._logger = get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> bytes | None:
        try:
            return self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            self._logger.warning("weights.store_unreadable", path=str(self._path), error=str(exc))
            return None

    def save(self, weights: WeightConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(weights.model_dump(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
