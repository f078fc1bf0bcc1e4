"""Dependency type variants: *how* one class-like element depends on another.

``caller`` is the name of the depender's method the dependency occurs in,
or ``None`` when it occurs at class-declaration level.  Member names are
validated on construction with the same identifier rule as FQSEN members,
so an invalid name never reaches a built graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from depanalyzer.errors import ShouldNotHappenError
from depanalyzer.graph.fqsen import check_identifier


def _check_caller(caller: str | None) -> None:
    if caller is not None:
        check_identifier(caller, "caller method")


@dataclass(frozen=True)
class MethodCall:
    """The depender calls ``callee`` on the dependee."""

    callee: str
    caller: str | None = None

    def __post_init__(self) -> None:
        check_identifier(self.callee, "method")
        _check_caller(self.caller)


@dataclass(frozen=True)
class PropertyFetch:
    """The depender reads ``property_name`` of the dependee."""

    property_name: str
    caller: str | None = None

    def __post_init__(self) -> None:
        name = self.property_name
        check_identifier(name.removeprefix("$") if isinstance(name, str) else name, "property")
        _check_caller(self.caller)


@dataclass(frozen=True)
class ConstantFetch:
    """The depender reads the class constant ``constant_name`` of the dependee."""

    constant_name: str
    caller: str | None = None

    def __post_init__(self) -> None:
        check_identifier(self.constant_name, "class constant")
        _check_caller(self.caller)


@dataclass(frozen=True)
class NewObject:
    """The depender instantiates the dependee."""

    caller: str | None = None

    def __post_init__(self) -> None:
        _check_caller(self.caller)


@dataclass(frozen=True)
class Generic:
    """Structural dependency: inheritance, implements, trait use, type hints."""


DependencyType = MethodCall | PropertyFetch | ConstantFetch | NewObject | Generic

# Serialized ``type`` keys, in declaration order.
DEPENDENCY_TYPE_NAMES: dict[type, str] = {
    MethodCall: "method_call",
    PropertyFetch: "property_fetch",
    ConstantFetch: "constant_fetch",
    NewObject: "new_object",
    Generic: "generic",
}


def dependency_type_to_dict(dependency_type: DependencyType) -> dict[str, Any]:
    """Serialize a dependency type to a plain dict with a ``type`` key."""
    type_name = DEPENDENCY_TYPE_NAMES.get(type(dependency_type))
    if type_name is None:
        msg = f"Unknown dependency type: {dependency_type!r}"
        raise ShouldNotHappenError(msg)

    data: dict[str, Any] = {"type": type_name}
    if isinstance(dependency_type, Generic):
        return data
    data["caller"] = dependency_type.caller
    if isinstance(dependency_type, MethodCall):
        data["callee"] = dependency_type.callee
    elif isinstance(dependency_type, PropertyFetch):
        data["property"] = dependency_type.property_name
    elif isinstance(dependency_type, ConstantFetch):
        data["constant"] = dependency_type.constant_name
    return data


def _require_str(data: dict[str, Any], key: str, type_name: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        msg = f"'{type_name}' dependency requires a non-empty string '{key}'"
        raise ValueError(msg)
    return value


def _optional_caller(data: dict[str, Any]) -> str | None:
    caller = data.get("caller")
    if caller is None:
        return None
    if not isinstance(caller, str) or not caller:
        msg = "'caller' must be a non-empty string when present"
        raise ValueError(msg)
    return caller


def dependency_type_from_dict(data: dict[str, Any]) -> DependencyType:
    """Parse the output of :func:`dependency_type_to_dict`.

    A missing ``type`` means ``generic``.  Raises ``ValueError`` on unknown
    types, missing payload fields, or member names that are not identifiers
    (:class:`~depanalyzer.errors.InvalidFQSENError`).
    """
    type_name = data.get("type", "generic")
    if type_name == "method_call":
        return MethodCall(
            callee=_require_str(data, "callee", type_name), caller=_optional_caller(data)
        )
    if type_name == "property_fetch":
        return PropertyFetch(
            property_name=_require_str(data, "property", type_name),
            caller=_optional_caller(data),
        )
    if type_name == "constant_fetch":
        return ConstantFetch(
            constant_name=_require_str(data, "constant", type_name),
            caller=_optional_caller(data),
        )
    if type_name == "new_object":
        return NewObject(caller=_optional_caller(data))
    if type_name == "generic":
        return Generic()
    msg = (
        f"Unknown dependency type '{type_name}', "
        f"must be one of {sorted(DEPENDENCY_TYPE_NAMES.values())}"
    )
    raise ValueError(msg)
