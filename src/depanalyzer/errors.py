"""Exception taxonomy shared by the graph, detector, and dumper layers."""

from __future__ import annotations


class DependencyAnalyzerError(Exception):
    """Base class for errors caused by user input (config, patterns, facts)."""


class InvalidFQSENError(DependencyAnalyzerError, ValueError):
    """Raised when a structural element name is malformed."""


class InvalidPatternError(DependencyAnalyzerError, ValueError):
    """Raised when a structural element pattern cannot be compiled."""


class InvalidRuleDefinitionError(DependencyAnalyzerError, ValueError):
    """Raised when a rule or component definition is malformed."""


class ConfigError(DependencyAnalyzerError):
    """Raised when the configuration file cannot be read or is invalid."""


class FactsFileError(DependencyAnalyzerError):
    """Raised when a dependency facts file is malformed."""


class ResolveDependencyError(Exception):
    """Raised by a resolver that cannot process a syntax node."""


class ShouldNotHappenError(RuntimeError):
    """Internal invariant violation.

    Distinct from :class:`DependencyAnalyzerError`: it signals a bug in the
    analyzer (or in an injected resolver), never a user mistake, and is
    always propagated.
    """
