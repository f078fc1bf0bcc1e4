"""Tests for depanalyzer.dumper.collector with an in-memory resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from depanalyzer.dumper.collector import DependencyCollector
from depanalyzer.dumper.resolver import (
    ClassReference,
    FunctionReference,
    ResolutionScope,
    ResolvedDependency,
)
from depanalyzer.errors import ResolveDependencyError, ShouldNotHappenError
from depanalyzer.graph.dependency_types import Generic, MethodCall, NewObject

if TYPE_CHECKING:
    from collections.abc import Iterable


class FakeResolver:
    """Resolver answering from dicts keyed by node."""

    def __init__(
        self,
        facts: dict[str, list[ResolvedDependency]],
        declarations: dict[str, str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.facts = facts
        self.declarations = declarations or {}
        self.failing = failing or set()

    def resolve_dependencies(
        self, node: object, scope: ResolutionScope
    ) -> Iterable[ResolvedDependency]:
        if node in self.failing:
            msg = f"cannot resolve {node}"
            raise ResolveDependencyError(msg)
        return self.facts.get(str(node), [])

    def resolve_declared_class(self, node: object) -> str | None:
        return self.declarations.get(str(node))


def _fact(dependee: str, dependency_type: object = None) -> ResolvedDependency:
    return ResolvedDependency(
        dependee=ClassReference(dependee),
        dependency_type=dependency_type or Generic(),  # type: ignore[arg-type]
    )


IN_SERVICE = ResolutionScope(class_name="App\\Service", function_name="run")


class TestDependencyCollector:
    def test_fact_inside_class_uses_scope_class(self) -> None:
        resolver = FakeResolver({"call": [_fact("Domain\\Repo", MethodCall("save", "run"))]})
        collector = DependencyCollector(resolver)
        collector("call", IN_SERVICE)
        graph = collector.create_dependency_graph()

        arrow = graph.get_arrow("App\\Service", "Domain\\Repo")
        assert arrow is not None
        assert arrow.dependency_types == (MethodCall("save", "run"),)

    def test_declaration_outside_class(self) -> None:
        resolver = FakeResolver(
            {"class_decl": [_fact("App\\BaseService")]},
            declarations={"class_decl": "\\App\\Service"},
        )
        collector = DependencyCollector(resolver)
        collector("class_decl", ResolutionScope())
        graph = collector.create_dependency_graph()

        assert graph.has_dependency("App\\Service", "App\\BaseService")

    def test_fact_outside_any_class_is_dropped(self) -> None:
        collector = DependencyCollector(FakeResolver({"new": [_fact("App\\Thing", NewObject())]}))
        collector("new", ResolutionScope(function_name="bootstrap"))
        graph = collector.create_dependency_graph()

        assert graph.count_edges() == 0
        assert collector.facts_seen == 1
        assert collector.facts_dropped == 1

    def test_function_reference_is_dropped(self) -> None:
        fact = ResolvedDependency(FunctionReference("App\\helper"), Generic())
        collector = DependencyCollector(FakeResolver({"call": [fact]}))
        collector("call", IN_SERVICE)
        graph = collector.create_dependency_graph()

        assert graph.count_edges() == 0
        assert graph.count_classes() == 0
        assert collector.facts_dropped == 1

    def test_self_reference_is_dropped(self) -> None:
        collector = DependencyCollector(FakeResolver({"static": [_fact("\\App\\Service")]}))
        collector("static", IN_SERVICE)
        assert collector.create_dependency_graph().count_edges() == 0
        assert collector.facts_dropped == 1

    def test_facts_from_several_nodes_merge(self) -> None:
        resolver = FakeResolver(
            {
                "a": [_fact("Domain\\Repo", MethodCall("save", "run"))],
                "b": [_fact("Domain\\Repo", MethodCall("save", "run")), _fact("Domain\\Id")],
            }
        )
        collector = DependencyCollector(resolver)
        collector("a", IN_SERVICE)
        collector("b", IN_SERVICE)
        graph = collector.create_dependency_graph()

        assert graph.count_edges() == 2
        assert collector.facts_seen == 3

    def test_resolver_failure_is_internal_error(self) -> None:
        collector = DependencyCollector(FakeResolver({}, failing={"broken"}))
        with pytest.raises(ShouldNotHappenError, match="collecting dependencies failed") as exc:
            collector("broken", IN_SERVICE)
        assert isinstance(exc.value.__cause__, ResolveDependencyError)

    def test_unexpected_reference_is_internal_error(self) -> None:
        fact = ResolvedDependency("App\\Thing", Generic())  # type: ignore[arg-type]
        collector = DependencyCollector(FakeResolver({"odd": [fact]}))
        with pytest.raises(ShouldNotHappenError, match="unexpected reference"):
            collector("odd", IN_SERVICE)
