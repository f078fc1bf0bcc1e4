"""A named architectural component defined by element-name patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from depanalyzer.graph.pattern_matcher import StructuralElementPatternMatcher


@dataclass(frozen=True)
class Component:
    """One architectural unit of a dependency rule.

    ``depender_matcher`` / ``dependee_matcher`` are allow-lists.  ``None``
    means the component does not restrict that direction.
    """

    name: str
    define_matcher: StructuralElementPatternMatcher
    depender_matcher: StructuralElementPatternMatcher | None = None
    dependee_matcher: StructuralElementPatternMatcher | None = None

    @property
    def restricts_dependers(self) -> bool:
        return self.depender_matcher is not None

    @property
    def restricts_dependees(self) -> bool:
        return self.dependee_matcher is not None

    def is_belonged_to(self, name: str) -> bool:
        return self.define_matcher.is_match(name)

    def verify_depender(self, name: str) -> bool:
        """Return True if *name* may depend on elements of this component.

        Members of the component itself are always allowed.
        """
        if self.is_belonged_to(name):
            return True
        if self.depender_matcher is None:
            return True
        return self.depender_matcher.is_match(name)

    def verify_dependee(self, name: str) -> bool:
        """Return True if elements of this component may depend on *name*."""
        if self.is_belonged_to(name):
            return True
        if self.dependee_matcher is None:
            return True
        return self.dependee_matcher.is_match(name)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"define": self.define_matcher.to_dict()}
        if self.depender_matcher is not None:
            data["depender"] = self.depender_matcher.to_dict()
        if self.dependee_matcher is not None:
            data["dependee"] = self.dependee_matcher.to_dict()
        return data
