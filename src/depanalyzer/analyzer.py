"""Verification orchestrator: load config and facts, build graph, detect, format."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depanalyzer.config import load_config
from depanalyzer.detector.violation_detector import RuleViolationDetector
from depanalyzer.dumper.facts import load_graph

if TYPE_CHECKING:
    from pathlib import Path

    from depanalyzer.detector.rule import DependencyRule, Violation
    from depanalyzer.graph.dependency_graph import DependencyGraph


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class VerifyResult:
    """Result of a verification run."""

    violations: list[Violation] = field(default_factory=list)
    rules_evaluated: int = 0
    classes: int = 0
    edges: int = 0
    elapsed_ms: float = 0.0


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------


def load_rules(config_path: Path) -> list[DependencyRule]:
    """Load the config file and build its dependency rules.

    Raises ``ConfigError`` or ``InvalidRuleDefinitionError``.
    """
    config = load_config(config_path)
    return config.create_rule_factory().create(config.rules)


def inspect_graph(graph: DependencyGraph, rules: list[DependencyRule]) -> VerifyResult:
    """Run *rules* against an already-built graph."""
    start = time.monotonic()
    violations = RuleViolationDetector(rules).inspect(graph)
    return VerifyResult(
        violations=violations,
        rules_evaluated=len(rules),
        classes=graph.count_classes(),
        edges=graph.count_edges(),
        elapsed_ms=(time.monotonic() - start) * 1000,
    )


def verify(config_path: Path, facts_path: Path) -> VerifyResult:
    """Load rules and facts, build the graph, and return every violation.

    Rules are loaded before the facts file is read, so configuration errors
    are reported without touching the graph.

    Raises
    ------
    ConfigError
        The config file is missing or structurally invalid.
    InvalidRuleDefinitionError
        A rule or component definition is malformed.
    FactsFileError
        The facts file is missing or malformed.
    """
    start = time.monotonic()
    rules = load_rules(config_path)
    graph = load_graph(facts_path)
    result = inspect_graph(graph, rules)
    result.elapsed_ms = (time.monotonic() - start) * 1000
    return result


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(result: VerifyResult) -> str:
    """Format a VerifyResult as human-readable text.

    Example output with violations::

        Graph: 10 classes, 14 edges

        x layered
          \\Controller\\Dir\\Class2 (ControllerLayer) must not depend on
          \\Application\\Class1 (ApplicationLayer)

        1 violations found (1 rules evaluated, 0.0s)
    """
    lines: list[str] = []
    lines.append(f"Graph: {result.classes} classes, {result.edges} edges")
    lines.append("")

    elapsed_str = f"{result.elapsed_ms / 1000:.1f}s"

    if result.violations:
        for v in result.violations:
            lines.append(f"✗ {v.rule_name}")
            lines.append(f"  {v.message}")
            lines.append("")

        count = len(result.violations)
        lines.append(
            f"{count} violations found ({result.rules_evaluated} rules evaluated, {elapsed_str})"
        )
    else:
        lines.append(
            f"✓ No violations found ({result.rules_evaluated} rules evaluated, {elapsed_str})"
        )

    return "\n".join(lines)


def format_json(result: VerifyResult) -> str:
    """Format a VerifyResult as structured JSON with ``violations`` and ``summary``."""
    violations_list: list[dict[str, str]] = []
    for v in result.violations:
        violations_list.append({"rule": v.rule_name, **v.to_dict()})

    output: dict[str, object] = {
        "violations": violations_list,
        "summary": {
            "rules_evaluated": result.rules_evaluated,
            "violations_count": len(result.violations),
            "classes": result.classes,
            "edges": result.edges,
            "elapsed_ms": result.elapsed_ms,
        },
    }

    return json.dumps(output, indent=2)


def format_porcelain(result: VerifyResult) -> str:
    """Format one violation per line.

    Format: ``rule:dependerComponent:depender:dependeeComponent:dependee``.
    Returns an empty string when there are no violations.
    """
    return "\n".join(
        f"{v.rule_name}:{v.depender_component}:{v.depender}:"
        f"{v.dependee_component}:{v.dependee}"
        for v in result.violations
    )
