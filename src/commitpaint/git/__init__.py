"""Git integration for writing backdated commits."""

from .driver import GIT_AVAILABLE, GitDriver, RepositoryDriver

__all__ = [
    "GIT_AVAILABLE",
    "GitDriver",
    "RepositoryDriver",
]
