"""Include/exclude name patterns over fully qualified structural element names.

Pattern syntax::

    \\Foo\\Bar       exactly \\Foo\\Bar
    \\Foo\\          \\Foo itself and everything below it (segment-wise)
    \\               everything
    @php_native      every name in the native-name set given to the matcher
    !<pattern>       exclude instead of include

A candidate matches when at least one include pattern matches and no
exclude pattern does.  A pattern list made only of excludes includes
everything not excluded.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from depanalyzer.errors import InvalidPatternError
from depanalyzer.graph.fqsen import NAMESPACE_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Iterable

PHP_NATIVE_CLASSES = "@php_native"
MAGIC_WORDS: frozenset[str] = frozenset({PHP_NATIVE_CLASSES})

EXCLUDE_PREFIX = "!"
MAGIC_PREFIX = "@"
MATCH_ALL = NAMESPACE_SEPARATOR

_SEGMENT_RE = re.compile(r"^[^\W\d]\w*$")


def _strip_root(name: str) -> str:
    return name[1:] if name.startswith(NAMESPACE_SEPARATOR) else name


def _validate_positive(pattern: str, raw: str) -> None:
    """Validate a pattern with any leading ``!`` already removed."""
    if not pattern:
        msg = f"Pattern must not be empty: '{raw}'"
        raise InvalidPatternError(msg)
    if pattern.startswith(EXCLUDE_PREFIX):
        msg = f"Double negation is not allowed: '{raw}'"
        raise InvalidPatternError(msg)
    if pattern.startswith(MAGIC_PREFIX):
        if pattern not in MAGIC_WORDS:
            msg = f"Unknown magic word '{pattern}', must be one of {sorted(MAGIC_WORDS)}"
            raise InvalidPatternError(msg)
        return
    if not pattern.startswith(NAMESPACE_SEPARATOR):
        msg = (
            f"Pattern must start with '{NAMESPACE_SEPARATOR}', '{EXCLUDE_PREFIX}' "
            f"or '{MAGIC_PREFIX}': '{raw}'"
        )
        raise InvalidPatternError(msg)
    if pattern == MATCH_ALL:
        return

    body = pattern[1:].removesuffix(NAMESPACE_SEPARATOR)
    for segment in body.split(NAMESPACE_SEPARATOR):
        if not _SEGMENT_RE.match(segment):
            msg = f"Invalid namespace segment '{segment}' in pattern '{raw}'"
            raise InvalidPatternError(msg)


def split_patterns(patterns: Iterable[str]) -> tuple[list[str], list[str]]:
    """Validate *patterns* and split them into ``(include, exclude)``.

    Exclude patterns are returned without their ``!`` prefix.
    """
    includes: list[str] = []
    excludes: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            msg = f"Pattern must be a string, got {type(pattern).__name__}: {pattern!r}"
            raise InvalidPatternError(msg)
        if pattern.startswith(EXCLUDE_PREFIX):
            positive = pattern[len(EXCLUDE_PREFIX) :]
            _validate_positive(positive, pattern)
            excludes.append(positive)
        else:
            _validate_positive(pattern, pattern)
            includes.append(pattern)
    return includes, excludes


class StructuralElementPatternMatcher:
    """Compiled include/exclude pattern list.

    *native_names* backs the ``@php_native`` magic word.  It is copied and
    frozen at construction, so the matcher is deterministic afterwards.
    """

    def __init__(self, patterns: Iterable[str], *, native_names: Iterable[str] = ()) -> None:
        self._includes, self._excludes = split_patterns(patterns)
        self._native_names: frozenset[str] = frozenset(_strip_root(n) for n in native_names)

    def __repr__(self) -> str:
        return (
            f"StructuralElementPatternMatcher(include={self._includes!r}, "
            f"exclude={self._excludes!r})"
        )

    @property
    def includes(self) -> tuple[str, ...]:
        return tuple(self._includes)

    @property
    def excludes(self) -> tuple[str, ...]:
        return tuple(self._excludes)

    def _match_pattern(self, pattern: str, name: str) -> bool:
        if pattern == MATCH_ALL:
            return True
        if pattern == PHP_NATIVE_CLASSES:
            return name in self._native_names

        if pattern.endswith(NAMESPACE_SEPARATOR):
            namespace = pattern[1:-1]
            return name == namespace or name.startswith(namespace + NAMESPACE_SEPARATOR)
        return name == pattern[1:]

    def is_match(self, name: str) -> bool:
        """Return True if *name* (with or without the leading ``\\``) matches."""
        candidate = _strip_root(name)
        includes = self._includes
        if not includes and self._excludes:
            includes = [MATCH_ALL]

        if not any(self._match_pattern(p, candidate) for p in includes):
            return False
        return not any(self._match_pattern(p, candidate) for p in self._excludes)

    def to_dict(self) -> dict[str, list[str]]:
        """Return ``{"include": [...], "exclude": [...]}`` (excludes without ``!``)."""
        return {"include": list(self._includes), "exclude": list(self._excludes)}
