"""Dumper domain: resolver contract, dependency collection, facts files."""

from depanalyzer.dumper.collector import DependencyCollector
from depanalyzer.dumper.facts import (
    DependencyFact,
    build_graph,
    load_facts,
    load_graph,
    parse_fact,
)
from depanalyzer.dumper.resolver import (
    ClassReference,
    DependencyResolver,
    FunctionReference,
    ResolutionScope,
    ResolvedDependency,
)

__all__ = [
    "ClassReference",
    "DependencyCollector",
    "DependencyFact",
    "DependencyResolver",
    "FunctionReference",
    "ResolutionScope",
    "ResolvedDependency",
    "build_graph",
    "load_facts",
    "load_graph",
    "parse_fact",
]
