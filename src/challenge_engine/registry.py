"""Constraint registry with auto-discovery of ChallengeConstraint subclasses."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from challenge_engine.constraints.base import ChallengeConstraint


class ConstraintRegistry:
    """Discovers and manages all ChallengeConstraint implementations.

    Scans the constraints/ package for concrete subclasses of
    ChallengeConstraint. A new constraint kind is added by dropping a module
    into that package and a matching field onto ChallengeDefinition.
    """

    def __init__(self) -> None:
        self._constraints: dict[str, ChallengeConstraint] = {}

    def discover_constraints(self) -> None:
        """Scan the constraints package and register every constraint class."""
        import challenge_engine.constraints as constraints_pkg

        package_path = Path(constraints_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(constraints_pkg.__name__, str(package_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, ChallengeConstraint)
                    and attr is not ChallengeConstraint
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, constraint: ChallengeConstraint) -> None:
        """Register a constraint instance by its constraint_id."""
        self._constraints[constraint.constraint_id] = constraint

    def get(self, constraint_id: str) -> ChallengeConstraint | None:
        return self._constraints.get(constraint_id)

    def get_all_constraints(self) -> list[ChallengeConstraint]:
        """All registered constraints in ChallengeDefinition field order."""
        return sorted(self._constraints.values(), key=lambda c: c.order)

    @property
    def constraint_ids(self) -> list[str]:
        return list(self._constraints.keys())
