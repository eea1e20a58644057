"""Top-level package for the modification tree.

Provides subpackages:
- modtree.core – leaf/group models, cost policies, counters, sorting, schemas
- modtree.tree – the binary search tree engine and its BFS toolkit
"""

def _get_version() -> str:
    """Installed distribution version, else the [project] version of a checkout."""
    from importlib.metadata import PackageNotFoundError, version as dist_version

    try:
        return dist_version("modtree")
    except PackageNotFoundError:
        pass

    # Source checkout without an install: src/modtree -> repo root
    from pathlib import Path

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject.is_file():
        return "0.0.0"
    in_project = False
    for raw in pyproject.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line.startswith("["):
            in_project = line == "[project]"
        elif in_project and line.startswith("version"):
            return line.partition("=")[2].strip().strip("\"'")
    return "0.0.0"

__version__ = _get_version()

from .config import TreeConfig
from .errors import (
    AlreadyResolvedError,
    DuplicateStateError,
    InvalidArgumentError,
    NotFoundError,
    TreeError,
)
from .core.models import (
    DiscountedCostPolicy,
    Modification,
    ModificationGroup,
    ModificationType,
    StandardCostPolicy,
    TreeOrder,
)
from .tree import ModificationTree, Node, Traversal

__all__: list[str] = [
    "__version__",
    "TreeConfig",
    "TreeError",
    "InvalidArgumentError",
    "NotFoundError",
    "DuplicateStateError",
    "AlreadyResolvedError",
    "ModificationType",
    "TreeOrder",
    "StandardCostPolicy",
    "DiscountedCostPolicy",
    "Modification",
    "ModificationGroup",
    "ModificationTree",
    "Node",
    "Traversal",
]
