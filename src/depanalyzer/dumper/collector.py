"""Feed resolver facts for each visited node into a graph builder."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depanalyzer.dumper.resolver import ClassReference, FunctionReference
from depanalyzer.errors import ResolveDependencyError, ShouldNotHappenError
from depanalyzer.graph.builder import DependencyGraphBuilder
from depanalyzer.graph.fqsen import FQSEN

if TYPE_CHECKING:
    from depanalyzer.dumper.resolver import DependencyResolver, ResolutionScope
    from depanalyzer.graph.dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class DependencyCollector:
    """Node visitor callback: ``collector(node, scope)`` for every node walked.

    Inside a class the depender is the scope's class; outside one, only
    class-like declaration nodes (``extends``/``implements`` facts) produce
    edges.  Function references never become edges.
    """

    def __init__(
        self,
        resolver: DependencyResolver,
        builder: DependencyGraphBuilder | None = None,
    ) -> None:
        self._resolver = resolver
        self._builder = builder if builder is not None else DependencyGraphBuilder()
        self.facts_seen = 0
        self.facts_dropped = 0

    def __call__(self, node: object, scope: ResolutionScope) -> None:
        self.collect(node, scope)

    def collect(self, node: object, scope: ResolutionScope) -> None:
        try:
            resolved = list(self._resolver.resolve_dependencies(node, scope))
        except ResolveDependencyError as exc:
            msg = "collecting dependencies failed"
            raise ShouldNotHappenError(msg) from exc

        for fact in resolved:
            self.facts_seen += 1
            dependee = fact.dependee
            if isinstance(dependee, FunctionReference):
                self.facts_dropped += 1
                continue
            if not isinstance(dependee, ClassReference):
                msg = f"resolving node dependency failed: unexpected reference {dependee!r}"
                raise ShouldNotHappenError(msg)

            depender_name = self._depender_name(node, scope)
            if depender_name is None:
                logger.debug("Dropping %s: no enclosing class", dependee.name)
                self.facts_dropped += 1
                continue

            depender = FQSEN.create_class(depender_name)
            target = FQSEN.create_class(dependee.name)
            if depender == target:
                self.facts_dropped += 1
                continue
            self._builder.add_dependency(depender, target, fact.dependency_type)

    def _depender_name(self, node: object, scope: ResolutionScope) -> str | None:
        if scope.in_class:
            return scope.class_name
        return self._resolver.resolve_declared_class(node)

    def create_dependency_graph(self) -> DependencyGraph:
        logger.debug(
            "Collected %d facts (%d dropped)", self.facts_seen, self.facts_dropped
        )
        return self._builder.build()
