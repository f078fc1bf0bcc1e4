"""Dependency rules: a named set of components checked against a graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from depanalyzer.detector.component import Component
    from depanalyzer.graph.dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """A single edge that breaches a component's allow-list."""

    rule_name: str
    depender_component: str
    depender: str  # class FQSEN string, e.g. "\\Controller\\Dir\\Class2"
    dependee_component: str
    dependee: str

    def to_dict(self) -> dict[str, str]:
        return {
            "dependerComponent": self.depender_component,
            "depender": self.depender,
            "dependeeComponent": self.dependee_component,
            "dependee": self.dependee,
        }

    @property
    def message(self) -> str:
        return (
            f"{self.depender} ({self.depender_component}) must not depend on "
            f"{self.dependee} ({self.dependee_component})"
        )


class DependencyRule:
    """Named, ordered collection of :class:`Component` objects."""

    def __init__(self, name: str, components: list[Component]) -> None:
        self.name = name
        self.components: tuple[Component, ...] = tuple(components)

    def __repr__(self) -> str:
        names = [c.name for c in self.components]
        return f"DependencyRule(name={self.name!r}, components={names!r})"

    def get_component(self, name: str) -> Component | None:
        for component in self.components:
            if component.name == name:
                return component
        return None

    def _components_of(self, name: str) -> list[Component]:
        return [c for c in self.components if c.is_belonged_to(name)]

    def is_satisfied_by(self, graph: DependencyGraph) -> list[Violation]:
        """Return the violations of this rule, in graph edge order.

        Every (depender component, dependee component) pair is checked for
        each edge.  Pairs inside one component and elements outside every
        component are never violations.  An edge is reported at most once
        per component pair.
        """
        violations: list[Violation] = []
        membership: dict[str, list[Component]] = {}

        def _cached_components(name: str) -> list[Component]:
            if name not in membership:
                membership[name] = self._components_of(name)
            return membership[name]

        for arrow in graph.get_dependency_arrows():
            depender = str(arrow.get_depender_class())
            dependee = str(arrow.get_dependee_class())
            depender_components = _cached_components(depender)
            if not depender_components:
                continue
            dependee_components = _cached_components(dependee)

            for depender_component in depender_components:
                for dependee_component in dependee_components:
                    if depender_component is dependee_component:
                        continue
                    allowed = True
                    if dependee_component.restricts_dependers:
                        allowed = dependee_component.verify_depender(depender)
                    if allowed and depender_component.restricts_dependees:
                        allowed = depender_component.verify_dependee(dependee)
                    if allowed:
                        continue

                    logger.debug(
                        "Rule %s: %s (%s) -> %s (%s) violates allow-list",
                        self.name,
                        depender,
                        depender_component.name,
                        dependee,
                        dependee_component.name,
                    )
                    violations.append(
                        Violation(
                            rule_name=self.name,
                            depender_component=depender_component.name,
                            depender=depender,
                            dependee_component=dependee_component.name,
                            dependee=dependee,
                        )
                    )

        return violations

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Normalized view: ``{rule_name: {component_name: {define, depender?, dependee?}}}``."""
        return {self.name: {c.name: c.to_dict() for c in self.components}}
