"""Load ``depanalyzer.yml``: rule definitions and the native class list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from depanalyzer.detector.rule_factory import DependencyRuleFactory
from depanalyzer.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "depanalyzer.yml"
SUPPORTED_SCHEMA_VERSIONS: frozenset[int] = frozenset({1})


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys instead of keeping the last one."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError as exc:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found unhashable key ({exc})",
                    key_node.start_mark,
                ) from exc
            if duplicate:
                msg = f"Duplicate key {key!r}"
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark, msg, key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


@dataclass
class AnalyzerConfig:
    """Parsed configuration file."""

    rules: dict[str, Any] = field(default_factory=dict)
    native_classes: list[str] = field(default_factory=list)
    path: Path | None = None

    def create_rule_factory(self) -> DependencyRuleFactory:
        return DependencyRuleFactory(native_names=self.native_classes)


def resolve_config_path(config_path: Path | None, project_root: Path | None = None) -> Path:
    """Explicit path wins, otherwise ``<project_root or cwd>/depanalyzer.yml``."""
    if config_path is not None:
        return config_path
    return (project_root or Path.cwd()) / DEFAULT_CONFIG_FILENAME


def load_config(config_path: Path) -> AnalyzerConfig:
    """Parse a configuration file.

    Raises :class:`ConfigError` when the file is missing, not valid YAML,
    has duplicate keys, or has an invalid top-level structure.  Rule bodies
    are validated later by :class:`DependencyRuleFactory`.
    """
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.load(fh, Loader=_UniqueKeyLoader)  # noqa: S506
    except OSError as exc:
        msg = f"Cannot read config file {config_path}: {exc}"
        raise ConfigError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {config_path}: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f"{config_path.name} must be a YAML mapping"
        raise ConfigError(msg)

    version = data.get("version")
    if version is None:
        msg = f"{config_path.name}: missing required 'version' field"
        raise ConfigError(msg)
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        expected = sorted(SUPPORTED_SCHEMA_VERSIONS)
        msg = f"{config_path.name}: unsupported version {version}, expected one of {expected}"
        raise ConfigError(msg)

    rules = data.get("rules")
    if not isinstance(rules, dict) or not rules:
        msg = f"{config_path.name}: 'rules' must be a non-empty mapping"
        raise ConfigError(msg)

    native_raw = data.get("native_classes", [])
    if not isinstance(native_raw, list) or not all(isinstance(n, str) for n in native_raw):
        msg = f"{config_path.name}: 'native_classes' must be a list of strings"
        raise ConfigError(msg)

    unknown = sorted(str(k) for k in set(data) - {"version", "rules", "native_classes"})
    if unknown:
        logger.warning("%s: ignoring unknown keys %s", config_path.name, unknown)

    return AnalyzerConfig(rules=rules, native_classes=list(native_raw), path=config_path)
