"""Run every configured dependency rule against one graph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from depanalyzer.detector.rule import DependencyRule, Violation
    from depanalyzer.graph.dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class RuleViolationDetector:
    """Stateless checker: rules are fixed at construction, the graph is never mutated."""

    def __init__(self, rules: Iterable[DependencyRule]) -> None:
        self.rules: tuple[DependencyRule, ...] = tuple(rules)

    def inspect(self, graph: DependencyGraph) -> list[Violation]:
        """Return all violations, ordered by rule then by graph edge."""
        violations: list[Violation] = []
        for rule in self.rules:
            rule_violations = rule.is_satisfied_by(graph)
            logger.debug("Rule %s: %d violations", rule.name, len(rule_violations))
            violations.extend(rule_violations)

        logger.info(
            "Inspected %d edges against %d rules: %d violations",
            graph.count_edges(),
            len(self.rules),
            len(violations),
        )
        return violations
