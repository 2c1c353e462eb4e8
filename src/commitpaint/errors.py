"""Error hierarchy shared by the resolver, the sequencer and the CLI."""

from __future__ import annotations


class CommitPaintError(Exception):
    """Base class for every failure the tool reports to the operator."""


class ConfigError(CommitPaintError):
    """Raised when a configuration file cannot be loaded."""


class ToolUnavailableError(CommitPaintError):
    """Raised when the git executable cannot be used."""


class RepositoryError(CommitPaintError):
    """Raised when a git operation fails outside the apply phase."""


class DirtyRepositoryError(CommitPaintError):
    """Raised when the working tree has uncommitted changes and no cleanse policy is set."""


class FormatError(CommitPaintError):
    """Raised for a malformed date or offset token."""


class SequencingError(CommitPaintError):
    """Raised when a relative offset is used before any date was given."""


class ResolverInvariantError(CommitPaintError):
    """Raised when the resolver reaches a state its own rules should make unreachable."""


class RangeError(CommitPaintError):
    """Raised when an instant falls outside the accepted year window."""


class CommitFailure(CommitPaintError):
    """Raised when creating a single generated commit fails."""


class RollbackFailure(CommitPaintError):
    """Raised when restoring the pre-run head fails."""
