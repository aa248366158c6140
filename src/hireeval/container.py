"""Dependency injection container for the evaluation workflow."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import FileWeightStore, InMemoryWeightStore
from .core import ConfidenceCalculator, StageCatalog, WeightManager
from .report import ReportWriter
from .session import EvaluationSession


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    weight_store = providers.Singleton(InMemoryWeightStore)

    weight_manager = providers.Singleton(WeightManager, store=weight_store)

    stage_catalog = providers.Singleton(
        StageCatalog,
        criteria=config.criteria,
    )

    calculator = providers.Singleton(
        ConfidenceCalculator,
        thresholds=config.thresholds,
    )

    report_writer = providers.Singleton(ReportWriter)

    session = providers.Factory(
        EvaluationSession,
        weights=weight_manager,
        calculator=calculator,
        catalog=stage_catalog,
    )


def create_container(*, settings: dict | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if core_settings:
        container.config.override(core_settings)

    storage_settings = settings.get("storage", {}) if isinstance(settings, dict) else {}
    weights_file = storage_settings.get("weights_file")
    if weights_file:
        container.weight_store.override(
            providers.Singleton(FileWeightStore, path=weights_file)
        )

    return container
