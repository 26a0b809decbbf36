# pathfinding/__init__.py
import importlib
import pkgutil
from typing import Dict, Union
from .base import Algorithm, PathfindingAlgorithm

PATHFINDING_ALGOS: Dict[Algorithm, PathfindingAlgorithm] = {}


def load_algorithms() -> None:
    global PATHFINDING_ALGOS
    found: Dict[Algorithm, PathfindingAlgorithm] = {}
    package = __name__
    for info in pkgutil.iter_modules(__path__):
        name = info.name
        if name in {"base", "__init__"}:
            continue
        module = importlib.import_module(f"{package}.{name}")
        algo = getattr(module, "ALGORITHM", None)
        if algo is None:
            continue
        try:
            key = Algorithm(algo.name)
        except ValueError:
            raise ValueError(
                f"Module {name} registers unknown pathfinding name: {algo.name!r}"
            ) from None
        if key in found:
            raise ValueError(f"Duplicate pathfinding name: {key.value}")
        found[key] = algo

    missing = [a.value for a in Algorithm if a not in found]
    if missing:
        raise ValueError(f"No planner registered for: {missing}")

    # keep the enum's declaration order
    PATHFINDING_ALGOS = {a: found[a] for a in Algorithm}


def get_algorithm(name: Union[str, Algorithm]) -> PathfindingAlgorithm:
    """Look up a planner by its name ("bfs", "wallFollower", ...) or enum member."""
    try:
        key = Algorithm(name)
    except ValueError:
        raise ValueError(
            f"Unknown pathfinding algorithm: {name!r}. "
            f"Choose from {[a.value for a in Algorithm]}"
        ) from None
    return PATHFINDING_ALGOS[key]


load_algorithms()
