"""Shared test fixtures for depanalyzer."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from depanalyzer.graph.builder import DependencyGraphBuilder
from depanalyzer.graph.dependency_types import Generic

if TYPE_CHECKING:
    from depanalyzer.graph.dependency_graph import DependencyGraph


LAYERED_CLASSES: list[str] = [
    "Controller\\Class1",
    "Controller\\Dir\\Class2",
    "Controller\\Dir\\Dir\\Class3",
    "Application\\Class1",
    "Application\\Dir\\Class2",
    "Application\\Dir\\Dir\\Class3",
    "Domain\\Class1",
    "Domain\\Dir\\Class2",
    "Domain\\Dir\\Dir\\Class3",
    "Carbon\\Carbon",
]

LAYERED_EDGES: list[tuple[str, str]] = [
    ("Controller\\Class1", "Controller\\Dir\\Class2"),
    ("Controller\\Class1", "Controller\\Dir\\Dir\\Class3"),
    ("Controller\\Dir\\Class2", "Controller\\Dir\\Dir\\Class3"),
    ("Controller\\Dir\\Class2", "Application\\Class1"),
    ("Controller\\Dir\\Dir\\Class3", "Carbon\\Carbon"),
    ("Application\\Class1", "Application\\Dir\\Class2"),
    ("Application\\Class1", "Application\\Dir\\Dir\\Class3"),
    ("Application\\Dir\\Class2", "Application\\Dir\\Dir\\Class3"),
    ("Application\\Dir\\Class2", "Domain\\Class1"),
    ("Application\\Dir\\Dir\\Class3", "Carbon\\Carbon"),
    ("Domain\\Class1", "Domain\\Dir\\Class2"),
    ("Domain\\Class1", "Domain\\Dir\\Dir\\Class3"),
    ("Domain\\Dir\\Class2", "Domain\\Dir\\Dir\\Class3"),
    ("Domain\\Dir\\Dir\\Class3", "Carbon\\Carbon"),
]


@pytest.fixture()
def layered_graph() -> DependencyGraph:
    """Controller -> Application -> Domain graph, every layer also using Carbon."""
    builder = DependencyGraphBuilder()
    for name in LAYERED_CLASSES:
        builder.add_class(name)
    for depender, dependee in LAYERED_EDGES:
        builder.add_dependency(depender, dependee, Generic())
    return builder.build()


@pytest.fixture()
def layered_facts_json() -> str:
    """The layered graph as a facts document (JSON)."""
    return json.dumps(
        {
            "classes": ["\\" + name for name in LAYERED_CLASSES],
            "dependencies": [
                {"depender": "\\" + src, "dependee": "\\" + dst, "type": "generic"}
                for src, dst in LAYERED_EDGES
            ],
        }
    )
