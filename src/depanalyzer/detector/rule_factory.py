"""Build :class:`DependencyRule` objects from rule definition mappings.

Definition format (one entry per rule)::

    {
        "layered": {
            "ControllerLayer": {"define": ["\\\\Controller\\\\"]},
            "ApplicationLayer": {
                "define": ["\\\\Application\\\\"],
                "depender": ["ControllerLayer"],
            },
        },
    }

A bare component name (optionally negated with ``!``) in any pattern list
is replaced by the ``define`` include patterns of that component in the
same rule.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from depanalyzer.detector.component import Component
from depanalyzer.detector.rule import DependencyRule
from depanalyzer.errors import InvalidPatternError, InvalidRuleDefinitionError
from depanalyzer.graph.pattern_matcher import (
    EXCLUDE_PREFIX,
    StructuralElementPatternMatcher,
    split_patterns,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

COMPONENT_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")

DEFINE_KEY = "define"
DEPENDER_KEY = "depender"
DEPENDEE_KEY = "dependee"
VALID_COMPONENT_KEYS: frozenset[str] = frozenset({DEFINE_KEY, DEPENDER_KEY, DEPENDEE_KEY})


def _is_component_reference(pattern: str) -> bool:
    return bool(COMPONENT_NAME_RE.match(pattern.removeprefix(EXCLUDE_PREFIX)))


def _parse_pattern_list(value: object, context: str) -> list[str]:
    if not isinstance(value, list):
        msg = f"{context}: patterns must be a list, got {type(value).__name__}"
        raise InvalidRuleDefinitionError(msg)
    patterns: list[str] = []
    for item in value:
        if not isinstance(item, str):
            msg = f"{context}: pattern must be a string, got {item!r}"
            raise InvalidRuleDefinitionError(msg)
        patterns.append(item)
    return patterns


class _RuleExpander:
    """Resolve component-name references within one rule, detecting cycles."""

    def __init__(self, rule_name: str, defines: dict[str, list[str]]) -> None:
        self._rule_name = rule_name
        self._defines = defines
        self._resolved: dict[str, tuple[list[str], list[str]]] = {}

    def resolve_define(
        self, component_name: str, stack: tuple[str, ...] = ()
    ) -> tuple[list[str], list[str]]:
        """Return the ``(include, exclude)`` patterns of a component's define."""
        if component_name in self._resolved:
            return self._resolved[component_name]
        if component_name in stack:
            cycle = " -> ".join([*stack, component_name])
            msg = f"Rule '{self._rule_name}': circular component reference {cycle}"
            raise InvalidRuleDefinitionError(msg)

        context = f"Rule '{self._rule_name}' component '{component_name}' {DEFINE_KEY}"
        expanded = self.expand(self._defines[component_name], context, (*stack, component_name))
        self._resolved[component_name] = expanded
        return expanded

    def expand(
        self, patterns: list[str], context: str, stack: tuple[str, ...] = ()
    ) -> tuple[list[str], list[str]]:
        """Replace component references in *patterns* and split include/exclude."""
        includes: list[str] = []
        excludes: list[str] = []
        for pattern in patterns:
            if not _is_component_reference(pattern):
                try:
                    pattern_includes, pattern_excludes = split_patterns([pattern])
                except InvalidPatternError as exc:
                    msg = f"{context}: {exc}"
                    raise InvalidRuleDefinitionError(msg) from exc
                includes.extend(pattern_includes)
                excludes.extend(pattern_excludes)
                continue

            negated = pattern.startswith(EXCLUDE_PREFIX)
            referenced = pattern.removeprefix(EXCLUDE_PREFIX)
            if referenced not in self._defines:
                msg = f"{context}: unknown component '{referenced}'"
                raise InvalidRuleDefinitionError(msg)

            ref_includes, ref_excludes = self.resolve_define(referenced, stack)
            if ref_excludes:
                msg = (
                    f"{context}: component '{referenced}' cannot be referenced by name "
                    f"because its '{DEFINE_KEY}' has exclude patterns"
                )
                raise InvalidRuleDefinitionError(msg)
            target = excludes if negated else includes
            for ref_pattern in ref_includes:
                if ref_pattern not in target:
                    target.append(ref_pattern)
        return includes, excludes


class DependencyRuleFactory:
    """Create dependency rules, validating the whole definition eagerly.

    *native_names* is forwarded to every pattern matcher for ``@php_native``.
    """

    def __init__(self, *, native_names: Iterable[str] = ()) -> None:
        self._native_names = frozenset(native_names)

    def _matcher(
        self, includes: list[str], excludes: list[str]
    ) -> StructuralElementPatternMatcher:
        patterns = [*includes, *(EXCLUDE_PREFIX + p for p in excludes)]
        return StructuralElementPatternMatcher(patterns, native_names=self._native_names)

    def create(self, rule_definitions: Mapping[str, Any]) -> list[DependencyRule]:
        if not isinstance(rule_definitions, dict):
            msg = "Rule definitions must be a mapping of rule name to components"
            raise InvalidRuleDefinitionError(msg)
        return [
            self.create_rule(str(name), definition)
            for name, definition in rule_definitions.items()
        ]

    def create_rule(self, rule_name: str, definition: object) -> DependencyRule:
        if not isinstance(definition, dict) or not definition:
            msg = f"Rule '{rule_name}': must be a non-empty mapping of components"
            raise InvalidRuleDefinitionError(msg)

        defines: dict[str, list[str]] = {}
        raw_components: dict[str, dict[str, Any]] = {}
        for component_name, component_data in definition.items():
            context = f"Rule '{rule_name}' component '{component_name}'"
            if not isinstance(component_name, str) or not COMPONENT_NAME_RE.match(component_name):
                msg = f"Rule '{rule_name}': invalid component name {component_name!r}"
                raise InvalidRuleDefinitionError(msg)
            if not isinstance(component_data, dict):
                msg = f"{context}: definition must be a mapping"
                raise InvalidRuleDefinitionError(msg)
            unknown_keys = sorted(str(k) for k in set(component_data) - VALID_COMPONENT_KEYS)
            if unknown_keys:
                msg = (
                    f"{context}: unknown keys {unknown_keys}, "
                    f"must be among {sorted(VALID_COMPONENT_KEYS)}"
                )
                raise InvalidRuleDefinitionError(msg)

            if DEFINE_KEY not in component_data:
                msg = f"{context}: '{DEFINE_KEY}' is required"
                raise InvalidRuleDefinitionError(msg)
            define = _parse_pattern_list(component_data[DEFINE_KEY], f"{context} {DEFINE_KEY}")
            if not define:
                msg = f"{context}: '{DEFINE_KEY}' must contain at least one pattern"
                raise InvalidRuleDefinitionError(msg)
            defines[component_name] = define
            raw_components[component_name] = component_data

        expander = _RuleExpander(rule_name, defines)
        components: list[Component] = []
        for component_name, component_data in raw_components.items():
            context = f"Rule '{rule_name}' component '{component_name}'"
            define_matcher = self._matcher(*expander.resolve_define(component_name))

            matchers: dict[str, StructuralElementPatternMatcher | None] = {}
            for key in (DEPENDER_KEY, DEPENDEE_KEY):
                if key not in component_data:
                    matchers[key] = None
                    continue
                key_context = f"{context} {key}"
                patterns = _parse_pattern_list(component_data[key], key_context)
                matchers[key] = self._matcher(*expander.expand(patterns, key_context))

            components.append(
                Component(
                    name=component_name,
                    define_matcher=define_matcher,
                    depender_matcher=matchers[DEPENDER_KEY],
                    dependee_matcher=matchers[DEPENDEE_KEY],
                )
            )

        return DependencyRule(rule_name, components)
