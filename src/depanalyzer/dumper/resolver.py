"""Contract for the external dependency resolver.

A resolver turns one syntax node, seen in a resolution scope, into
already-resolved dependency facts.  References it cannot resolve (unknown
classes, environment-only symbols) are simply not returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from depanalyzer.graph.dependency_types import DependencyType


@dataclass(frozen=True)
class ResolutionScope:
    """Where a node appears: enclosing class and function/method, if any."""

    class_name: str | None = None
    function_name: str | None = None

    @property
    def in_class(self) -> bool:
        return self.class_name is not None


@dataclass(frozen=True)
class ClassReference:
    """Reference to a loaded class, interface, or trait."""

    name: str


@dataclass(frozen=True)
class FunctionReference:
    """Reference to a loaded free function."""

    name: str


@dataclass(frozen=True)
class ResolvedDependency:
    dependee: ClassReference | FunctionReference
    dependency_type: DependencyType


class DependencyResolver(Protocol):
    """Capability injected into :class:`~depanalyzer.dumper.collector.DependencyCollector`."""

    def resolve_dependencies(
        self, node: object, scope: ResolutionScope
    ) -> Iterable[ResolvedDependency]:
        """Return the dependency facts of *node*.

        May raise :class:`~depanalyzer.errors.ResolveDependencyError`.
        """
        ...

    def resolve_declared_class(self, node: object) -> str | None:
        """Return the class declared by *node*, or None if it is not a class-like declaration."""
        ...
