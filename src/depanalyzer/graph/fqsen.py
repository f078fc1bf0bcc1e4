"""Fully Qualified Structural Element Names (FQSEN).

An FQSEN identifies a class-like element, a member of one (method,
property, class constant), or a free function.  String forms::

    \\App\\Service                 class / interface / trait
    \\App\\Service::run()          method
    \\App\\Service::$name          property
    \\App\\Service::LIMIT          class constant
    \\App\\helper()                function

Member FQSENs can only be created from a :class:`ClassFQSEN`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from depanalyzer.errors import InvalidFQSENError

NAMESPACE_SEPARATOR = "\\"

_IDENTIFIER_RE = re.compile(r"^[^\W\d]\w*$")


def check_identifier(value: str, what: str) -> None:
    """Raise :class:`InvalidFQSENError` unless *value* is a single identifier."""
    if not isinstance(value, str) or not _IDENTIFIER_RE.match(value):
        msg = f"Invalid {what} name: '{value}'"
        raise InvalidFQSENError(msg)


def normalize_qualified_name(name: str) -> str:
    """Return *name* without its leading separator, validating every segment.

    Raises :class:`InvalidFQSENError` for empty names, empty segments
    (``A\\\\B``, trailing ``\\``) and segments that are not identifiers.
    """
    if not isinstance(name, str):
        msg = f"Qualified name must be a string, got {type(name).__name__}"
        raise InvalidFQSENError(msg)
    stripped = name[1:] if name.startswith(NAMESPACE_SEPARATOR) else name
    if not stripped:
        msg = f"Qualified name must not be empty: '{name}'"
        raise InvalidFQSENError(msg)
    for segment in stripped.split(NAMESPACE_SEPARATOR):
        if not segment:
            msg = f"Qualified name has an empty segment: '{name}'"
            raise InvalidFQSENError(msg)
        check_identifier(segment, "namespace segment")
    return stripped


class FQSEN:
    """Factory namespace and common base for all FQSEN value types."""

    __slots__ = ()

    @staticmethod
    def create_class(name: str) -> ClassFQSEN:
        """Create a class-like FQSEN from ``Foo\\Bar`` or ``\\Foo\\Bar``."""
        return ClassFQSEN(normalize_qualified_name(name))

    @staticmethod
    def create_function(name: str) -> FunctionFQSEN:
        """Create a function FQSEN from ``Foo\\helper`` or ``\\Foo\\helper``."""
        return FunctionFQSEN(normalize_qualified_name(name))


@dataclass(frozen=True)
class ClassFQSEN(FQSEN):
    """A class, interface, or trait.  ``name`` is stored without the root ``\\``."""

    name: str

    def __post_init__(self) -> None:
        if normalize_qualified_name(self.name) != self.name:
            msg = f"Class FQSEN must be stored without the leading separator: '{self.name}'"
            raise InvalidFQSENError(msg)

    def __str__(self) -> str:
        return NAMESPACE_SEPARATOR + self.name

    @property
    def short_name(self) -> str:
        return self.name.rsplit(NAMESPACE_SEPARATOR, 1)[-1]

    def create_method_fqsen(self, method_name: str) -> MethodFQSEN:
        return MethodFQSEN(self, method_name)

    def create_property_fqsen(self, property_name: str) -> PropertyFQSEN:
        # Accept both ``name`` and ``$name``.
        return PropertyFQSEN(self, property_name.removeprefix("$"))

    def create_class_constant_fqsen(self, constant_name: str) -> ClassConstantFQSEN:
        return ClassConstantFQSEN(self, constant_name)


@dataclass(frozen=True)
class MethodFQSEN(FQSEN):
    """A method of a class-like element."""

    owner: ClassFQSEN
    name: str

    def __post_init__(self) -> None:
        check_identifier(self.name, "method")

    def __str__(self) -> str:
        return f"{self.owner}::{self.name}()"


@dataclass(frozen=True)
class PropertyFQSEN(FQSEN):
    """A property of a class-like element."""

    owner: ClassFQSEN
    name: str

    def __post_init__(self) -> None:
        check_identifier(self.name, "property")

    def __str__(self) -> str:
        return f"{self.owner}::${self.name}"


@dataclass(frozen=True)
class ClassConstantFQSEN(FQSEN):
    """A constant declared on a class-like element."""

    owner: ClassFQSEN
    name: str

    def __post_init__(self) -> None:
        check_identifier(self.name, "class constant")

    def __str__(self) -> str:
        return f"{self.owner}::{self.name}"


@dataclass(frozen=True)
class FunctionFQSEN(FQSEN):
    """A free (namespaced) function."""

    name: str

    def __post_init__(self) -> None:
        if normalize_qualified_name(self.name) != self.name:
            msg = f"Function FQSEN must be stored without the leading separator: '{self.name}'"
            raise InvalidFQSENError(msg)

    def __str__(self) -> str:
        return f"{NAMESPACE_SEPARATOR}{self.name}()"


MemberFQSEN = MethodFQSEN | PropertyFQSEN | ClassConstantFQSEN
