"""Load pre-resolved dependency facts written by an external resolver.

File format (JSON, or YAML for any other extension)::

    {
      "classes": ["\\\\App\\\\Standalone"],
      "dependencies": [
        {"depender": "\\\\App\\\\A", "dependee": "\\\\Domain\\\\B",
         "type": "method_call", "caller": "run", "callee": "save"}
      ]
    }

``classes`` is optional and registers vertices that have no edges.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from depanalyzer.errors import FactsFileError
from depanalyzer.graph.builder import DependencyGraphBuilder
from depanalyzer.graph.dependency_types import dependency_type_from_dict
from depanalyzer.graph.fqsen import FQSEN

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from depanalyzer.graph.dependency_graph import DependencyGraph
    from depanalyzer.graph.dependency_types import DependencyType
    from depanalyzer.graph.fqsen import ClassFQSEN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyFact:
    """One resolved ``depender -> dependee`` fact."""

    depender: ClassFQSEN
    dependee: ClassFQSEN
    dependency_type: DependencyType


def _read_document(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            if path.suffix.lower() == ".json":
                return json.load(fh)
            return yaml.safe_load(fh)
    except OSError as exc:
        msg = f"Cannot read facts file {path}: {exc}"
        raise FactsFileError(msg) from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"Cannot parse facts file {path}: {exc}"
        raise FactsFileError(msg) from exc


def parse_fact(record: object, index: int) -> DependencyFact:
    """Parse one entry of the ``dependencies`` list."""
    if not isinstance(record, dict):
        msg = f"dependencies[{index}]: must be a mapping"
        raise FactsFileError(msg)

    for key in ("depender", "dependee"):
        if not isinstance(record.get(key), str):
            msg = f"dependencies[{index}]: '{key}' must be a string"
            raise FactsFileError(msg)

    try:
        return DependencyFact(
            depender=FQSEN.create_class(record["depender"]),
            dependee=FQSEN.create_class(record["dependee"]),
            dependency_type=dependency_type_from_dict(record),
        )
    except ValueError as exc:
        msg = f"dependencies[{index}]: {exc}"
        raise FactsFileError(msg) from exc


def load_facts(path: Path) -> tuple[list[ClassFQSEN], list[DependencyFact]]:
    """Parse a facts file into standalone classes and dependency facts."""
    data = _read_document(path)
    if not isinstance(data, dict):
        msg = f"Facts file {path} must contain a mapping"
        raise FactsFileError(msg)

    classes_raw = data.get("classes", [])
    dependencies_raw = data.get("dependencies", [])
    if not isinstance(classes_raw, list):
        msg = f"Facts file {path}: 'classes' must be a list"
        raise FactsFileError(msg)
    if not isinstance(dependencies_raw, list):
        msg = f"Facts file {path}: 'dependencies' must be a list"
        raise FactsFileError(msg)

    classes: list[ClassFQSEN] = []
    for idx, name in enumerate(classes_raw):
        if not isinstance(name, str):
            msg = f"classes[{idx}]: must be a string"
            raise FactsFileError(msg)
        try:
            classes.append(FQSEN.create_class(name))
        except ValueError as exc:
            msg = f"classes[{idx}]: {exc}"
            raise FactsFileError(msg) from exc

    facts = [parse_fact(record, idx) for idx, record in enumerate(dependencies_raw)]
    logger.debug("Loaded %d classes and %d facts from %s", len(classes), len(facts), path)
    return classes, facts


def build_graph(
    facts: Iterable[DependencyFact], classes: Iterable[ClassFQSEN] = ()
) -> DependencyGraph:
    """Feed *facts* (and edge-less *classes*) into a fresh builder."""
    builder = DependencyGraphBuilder()
    for cls in classes:
        builder.add_class(cls)
    for fact in facts:
        builder.add_dependency(fact.depender, fact.dependee, fact.dependency_type)
    return builder.build()


def load_graph(path: Path) -> DependencyGraph:
    """Load a facts file and build its dependency graph."""
    classes, facts = load_facts(path)
    return build_graph(facts, classes)
