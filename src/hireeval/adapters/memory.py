"""In-process weight store."""

from __future__ import annotations

import json

from ..schemas.weights import WeightConfig


class InMemoryWeightStore:
    """Keeps the serialized weights in memory for the lifetime of the process."""

    def __init__(self, initial: str | bytes | dict | None = None) -> None:
        self._value = initial

    def load(self) -> str | bytes | dict | None:
        return self._value

    def save(self, weights: WeightConfig) -> None:
        self._value = json.dumps(weights.model_dump())

    def clear(self) -> None:
        self._value = None
