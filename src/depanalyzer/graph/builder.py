"""Accumulate dependency facts into a :class:`DependencyGraph`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depanalyzer.errors import ShouldNotHappenError
from depanalyzer.graph.dependency_graph import DependencyArrow, DependencyGraph
from depanalyzer.graph.fqsen import FQSEN, ClassFQSEN

if TYPE_CHECKING:
    from depanalyzer.graph.dependency_types import DependencyType

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Single-use builder for one dependency graph.

    Parallel facts between the same pair of classes are merged into one
    edge carrying the distinct dependency types.  Self-dependencies are
    dropped.  Once :meth:`build` has been called the builder is closed.
    """

    def __init__(self) -> None:
        self._classes: dict[ClassFQSEN, None] = {}
        self._edges: dict[tuple[ClassFQSEN, ClassFQSEN], list[DependencyType]] = {}
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            msg = "DependencyGraphBuilder cannot be used after build()"
            raise ShouldNotHappenError(msg)

    def add_class(self, element: ClassFQSEN | str) -> ClassFQSEN:
        """Register a vertex without any edge.  Returns the normalized FQSEN."""
        self._ensure_open()
        cls = element if isinstance(element, ClassFQSEN) else FQSEN.create_class(element)
        self._classes.setdefault(cls, None)
        return cls

    def add_dependency(
        self,
        depender: ClassFQSEN | str,
        dependee: ClassFQSEN | str,
        dependency_type: DependencyType,
    ) -> None:
        """Record that *depender* depends on *dependee* in the given way."""
        self._ensure_open()
        depender_cls = self.add_class(depender)
        dependee_cls = self.add_class(dependee)
        if depender_cls == dependee_cls:
            logger.debug("Skipping self-dependency of %s", depender_cls)
            return

        types = self._edges.setdefault((depender_cls, dependee_cls), [])
        if dependency_type not in types:
            types.append(dependency_type)

    def build(self) -> DependencyGraph:
        """Close the builder and return an immutable graph snapshot."""
        self._ensure_open()
        self._built = True
        arrows = tuple(
            DependencyArrow(depender=src, dependee=dst, dependency_types=tuple(types))
            for (src, dst), types in self._edges.items()
        )
        graph = DependencyGraph(tuple(self._classes), arrows)
        logger.info(
            "Dependency graph built: %d classes, %d edges",
            graph.count_classes(),
            graph.count_edges(),
        )
        return graph
