"""Built dependency graph and its edges ("dependency arrows")."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from depanalyzer.errors import ShouldNotHappenError
from depanalyzer.graph.dependency_types import (
    ConstantFetch,
    DependencyType,
    Generic,
    MethodCall,
    NewObject,
    PropertyFetch,
    dependency_type_to_dict,
)
from depanalyzer.graph.fqsen import FQSEN, ClassFQSEN

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from depanalyzer.graph.fqsen import MethodFQSEN


@dataclass(frozen=True)
class DependencyArrow:
    """One directed edge between two class-like elements.

    ``dependency_types`` holds every distinct way the depender uses the
    dependee, in the order they were first recorded.
    """

    depender: ClassFQSEN
    dependee: ClassFQSEN
    dependency_types: tuple[DependencyType, ...]

    def get_depender_class(self) -> ClassFQSEN:
        return self.depender

    def get_dependee_class(self) -> ClassFQSEN:
        return self.dependee

    def _caller(self, caller: str | None) -> ClassFQSEN | MethodFQSEN:
        if caller is None:
            return self.depender
        return self.depender.create_method_fqsen(caller)

    def get_dependencies(self) -> list[tuple[FQSEN, FQSEN]]:
        """Expand the edge into ``(caller, callee)`` pairs, one per dependency type.

        Raises :class:`ShouldNotHappenError` on an unknown dependency variant.
        """
        pairs: list[tuple[FQSEN, FQSEN]] = []
        for dependency_type in self.dependency_types:
            if isinstance(dependency_type, MethodCall):
                callee: FQSEN = self.dependee.create_method_fqsen(dependency_type.callee)
                pairs.append((self._caller(dependency_type.caller), callee))
            elif isinstance(dependency_type, PropertyFetch):
                callee = self.dependee.create_property_fqsen(dependency_type.property_name)
                pairs.append((self._caller(dependency_type.caller), callee))
            elif isinstance(dependency_type, ConstantFetch):
                callee = self.dependee.create_class_constant_fqsen(dependency_type.constant_name)
                pairs.append((self._caller(dependency_type.caller), callee))
            elif isinstance(dependency_type, NewObject):
                pairs.append((self._caller(dependency_type.caller), self.dependee))
            elif isinstance(dependency_type, Generic):
                pairs.append((self.depender, self.dependee))
            else:
                msg = (
                    f"Unknown dependency type on edge {self.depender} -> {self.dependee}: "
                    f"{dependency_type!r}"
                )
                raise ShouldNotHappenError(msg)
        return pairs

    def to_dict(self) -> dict[str, Any]:
        return {
            "depender": str(self.depender),
            "dependee": str(self.dependee),
            "types": [dependency_type_to_dict(t) for t in self.dependency_types],
            "dependencies": [
                {"caller": str(caller), "callee": str(callee)}
                for caller, callee in self.get_dependencies()
            ],
        }


class DependencyGraph:
    """Read-only directed graph of class-like elements.

    Instances are produced by :class:`~depanalyzer.graph.builder.DependencyGraphBuilder`.
    Arrows are iterated in the order their first fact was recorded.
    """

    def __init__(
        self,
        classes: tuple[ClassFQSEN, ...],
        arrows: tuple[DependencyArrow, ...],
    ) -> None:
        self._classes = classes
        self._arrows = arrows
        self._arrow_index: Mapping[tuple[ClassFQSEN, ClassFQSEN], DependencyArrow] = {
            (a.depender, a.dependee): a for a in arrows
        }

    def __iter__(self) -> Iterator[DependencyArrow]:
        return iter(self._arrows)

    def __len__(self) -> int:
        return len(self._arrows)

    def __repr__(self) -> str:
        return f"DependencyGraph(classes={len(self._classes)}, edges={len(self._arrows)})"

    def get_classes(self) -> tuple[ClassFQSEN, ...]:
        return self._classes

    def get_dependency_arrows(self) -> tuple[DependencyArrow, ...]:
        return self._arrows

    def count_classes(self) -> int:
        return len(self._classes)

    def count_edges(self) -> int:
        return len(self._arrows)

    def get_arrow(
        self, depender: ClassFQSEN | str, dependee: ClassFQSEN | str
    ) -> DependencyArrow | None:
        return self._arrow_index.get((_as_class(depender), _as_class(dependee)))

    def has_dependency(self, depender: ClassFQSEN | str, dependee: ClassFQSEN | str) -> bool:
        return self.get_arrow(depender, dependee) is not None

    def get_dependees(self, depender: ClassFQSEN | str) -> list[ClassFQSEN]:
        """Return the classes *depender* depends on, in edge order."""
        cls = _as_class(depender)
        return [a.dependee for a in self._arrows if a.depender == cls]

    def get_dependers(self, dependee: ClassFQSEN | str) -> list[ClassFQSEN]:
        """Return the classes depending on *dependee*, in edge order."""
        cls = _as_class(dependee)
        return [a.depender for a in self._arrows if a.dependee == cls]

    def to_dict(self) -> dict[str, Any]:
        return {
            "classes": [str(c) for c in self._classes],
            "edges": [a.to_dict() for a in self._arrows],
        }


def _as_class(value: ClassFQSEN | str) -> ClassFQSEN:
    if isinstance(value, ClassFQSEN):
        return value
    return FQSEN.create_class(value)
