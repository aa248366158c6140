"""Active weight configuration backed by a persistence collaborator."""

from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic import ValidationError

from ..adapters import InMemoryWeightStore, WeightStore
from ..errors import InvalidWeights
from ..logging import get_logger
from ..schemas import DEFAULT_WEIGHTS, WeightConfig

_WEIGHT_FIELDS = ("psychometric", "technical", "final")


def _decode(raw: Any) -> Any:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


def parse_weights(raw: Any) -> WeightConfig:
    """Validate a raw weight mapping, raising ``InvalidWeights`` on any defect."""
    try:
        data = _decode(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidWeights() from exc
    if not isinstance(data, Mapping):
        raise InvalidWeights()
    missing = [name for name in _WEIGHT_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise InvalidWeights()
    try:
        return WeightConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidWeights() from exc


class WeightManager:
    """Owns the active WeightConfig shared by every evaluation."""

    def __init__(self, store: WeightStore | None = None) -> None:
        self._store = store or InMemoryWeightStore()
        self._logger = get_logger(__name__)
        self._active = self.load_persisted()

    @property
    def active(self) -> WeightConfig:
        return self._active

    def load(self, persisted: Any) -> WeightConfig:
        """Parse a persisted value, degrading to defaults on any failure."""
        if persisted is None:
            return DEFAULT_WEIGHTS
        try:
            weights = parse_weights(persisted)
        except InvalidWeights as exc:
            self._logger.warning(
                "weights.load_fallback",
                reason=repr(exc.__cause__ or exc),
                defaults=DEFAULT_WEIGHTS.model_dump(),
            )
            self._discard()
            return DEFAULT_WEIGHTS
        return weights

    def load_persisted(self) -> WeightConfig:
        """Read the store and load its value; an unreadable store counts as corrupt."""
        try:
            persisted = self._store.load()
        except (OSError, ValueError) as exc:
            self._logger.warning(
                "weights.load_fallback",
                reason=repr(exc),
                defaults=DEFAULT_WEIGHTS.model_dump(),
            )
            self._discard()
            return DEFAULT_WEIGHTS
        return self.load(persisted)

    def update(self, candidate: Any) -> WeightConfig:
        """Persist and activate a new configuration.

        The prior configuration stays active when validation or the store fails.
        """
        weights = parse_weights(candidate)
        self._store.save(weights)
        self._active = weights
        self._logger.info("weights.updated", **weights.model_dump())
        return weights

    def _discard(self) -> None:
        try:
            self._store.clear()
        except OSError as exc:
            self._logger.warning("weights.clear_failed", error=str(exc))
