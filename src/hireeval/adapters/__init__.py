"""Persistence adapters for the weight configuration."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas.weights import WeightConfig
from .file_store import FileWeightStore
from .memory import InMemoryWeightStore


@runtime_checkable
class WeightStore(Protocol):
    """Key-value persistence contract for the active weight configuration.

    ``load`` returns whatever was stored (JSON text, bytes or a mapping) or
    None when nothing is stored. The engine treats malformed values as absent.
    """

    def load(self) -> str | bytes | dict | None:
        """Return the raw persisted value, if any."""

    def save(self, weights: WeightConfig) -> None:
        """Persist a validated weight configuration."""

    def clear(self) -> None:
        """Discard the persisted value."""


__all__ = ["WeightStore", "FileWeightStore", "InMemoryWeightStore"]
