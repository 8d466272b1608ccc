"""Stage registry — every analysis stage is a plain function registered via decorator.

Usage:
    @stage(id="S1.02", layer=Layer.FEATURES, dependencies=["S1.01"])
    def feature_vector(ctx: PipelineContext) -> None:
        ctx.features = extract_features(ctx.sampled, lum=ctx.luminance)

The table is filled once, at import of the layer modules, and only read after.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lithoscope.engine.context import PipelineContext

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2", "layer3")


class Layer(enum.IntEnum):
    SAMPLING = 0
    FEATURES = 1
    CLASSIFICATION = 2
    REPORTING = 3


@dataclass
class StageSpec:
    id: str
    layer: Layer
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Ordered table of pipeline stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    def resolve_order(self) -> list[StageSpec]:
        """Topological sort respecting dependencies; ready stages run in id order."""
        pool = self._stages
        unknown = {dep for spec in pool.values() for dep in spec.dependencies} - pool.keys()
        if unknown:
            raise ValueError(f"Unknown stage dependencies: {sorted(unknown)}")

        # Kahn's algorithm
        in_degree = {sid: len(spec.dependencies) for sid, spec in pool.items()}
        ready = sorted(sid for sid, d in in_degree.items() if d == 0)
        ordered: list[StageSpec] = []

        while ready:
            sid = ready.pop(0)
            ordered.append(pool[sid])
            for other_id, other in pool.items():
                if sid in other.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        ready.append(other_id)
                        ready.sort()

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {stuck}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level table of the built-in stages
_registry = StageRegistry()
_loaded = False


def get_registry() -> StageRegistry:
    return _registry


def load_stages() -> StageRegistry:
    """Import every layer module so the @stage decorators fire (idempotent)."""
    global _loaded
    if not _loaded:
        for layer_name in _LAYER_PACKAGES:
            package = importlib.import_module(f"lithoscope.engine.{layer_name}")
            for _, module_name, _ in pkgutil.iter_modules(package.__path__):
                importlib.import_module(f"{package.__name__}.{module_name}")
        _loaded = True
    return _registry


def stage(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
