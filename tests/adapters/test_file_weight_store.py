from __future__ import annotations

import json
from pathlib import Path

from hireeval.adapters import FileWeightStore, InMemoryWeightStore, WeightStore
from hireeval.core import WeightManager
from hireeval.schemas import DEFAULT_WEIGHTS, WeightConfig


def test_stores_satisfy_protocol(tmp_path: Path):
    assert isinstance(FileWeightStore(tmp_path / "w.json"), WeightStore)
    assert isinstance(InMemoryWeightStore(), WeightStore)


def test_file_store_round_trip(tmp_path: Path):
    path = tmp_path / "nested" / "weights.json"
    store = FileWeightStore(path)
    assert store.load() is None

    store.save(WeightConfig(psychometric=25, technical=25, final=50))

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "psychometric": 25.0,
        "technical": 25.0,
        "final": 50.0,
    }
    assert WeightManager(FileWeightStore(path)).active.final == 50.0


def test_corrupt_file_is_discarded(tmp_path: Path):
    path = tmp_path / "weights.json"
    path.write_text('{"psychometric": 60, "technical": 60, "final": 60}', encoding="utf-8")

    manager = WeightManager(FileWeightStore(path))

    assert manager.active == DEFAULT_WEIGHTS
    assert not path.exists()


def test_clear_missing_file_is_noop(tmp_path: Path):
    FileWeightStore(tmp_path / "absent.json").clear()


def test_non_utf8_file_falls_back_to_defaults_and_is_cleared(tmp_path: Path):
    path = tmp_path / "weights.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    manager = WeightManager(FileWeightStore(path))

    assert manager.active == DEFAULT_WEIGHTS
    assert not path.exists()


def test_file_store_returns_raw_bytes(tmp_path: Path):
    path = tmp_path / "weights.json"
    path.write_text('{"psychometric": 20, "technical": 40, "final": 40}', encoding="utf-8")

    assert isinstance(FileWeightStore(path).load(), bytes)
