"""Repository driver contract and its GitPython adapter."""

from __future__ import annotations

import abc
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..errors import RepositoryError
from ..temporal.timestamps import stringify

try:
    from git import Git, Repo
    from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
    GIT_AVAILABLE = True
except ImportError:
    GIT_AVAILABLE = False
    Git = None
    Repo = None


class RepositoryDriver(abc.ABC):
    """Operations the commit sequencer needs from a version-control backend.

    Handles returned by :meth:`current_head` and :meth:`root_handle` are
    opaque to callers and only ever passed back to :meth:`hard_reset`.
    """

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Return whether the backend tool can be executed."""

    @abc.abstractmethod
    def is_repository(self) -> bool:
        """Return whether the working directory belongs to a repository."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Create an empty repository in the working directory."""

    @abc.abstractmethod
    def is_clean(self) -> bool:
        """Return whether there are no staged, unstaged or untracked changes."""

    @abc.abstractmethod
    def commit_at(self, instant: datetime, message: str) -> None:
        """Create one generated commit authored and committed at ``instant``."""

    @abc.abstractmethod
    def commit_all(self, instant: datetime, message: str) -> None:
        """Stage every working-tree change and commit it at ``instant``."""

    @abc.abstractmethod
    def bootstrap(self, instant: datetime) -> None:
        """Create the first commit of an empty repository at ``instant``."""

    @abc.abstractmethod
    def commit_count(self) -> int:
        """Return the number of commits reachable from HEAD (0 when unborn)."""

    @abc.abstractmethod
    def current_head(self) -> str:
        ...

    @abc.abstractmethod
    def hard_reset(self, handle: str) -> None:
        ...

    @abc.abstractmethod
    def root_handle(self) -> str:
        ...

    @abc.abstractmethod
    def soft_reset_to_root(self) -> None:
        ...

    def squash_all_into_one(self, instant: datetime, message: str) -> None:
        """Fold every commit after the root into a single commit at ``instant``.

        The root commit itself cannot take part in a reset, which is why an
        empty repository always receives a dedicated bootstrap commit first.
        """
        self.soft_reset_to_root()
        self.commit_all(instant, message)


class GitDriver(RepositoryDriver):
    """:class:`RepositoryDriver` backed by the ``git`` command through GitPython.

    Parameters
    ----------
    repo_path:
        Working directory the commits are written into.
    target_file:
        File rewritten with the commit date on every generated commit.
    bootstrap_file, bootstrap_text, bootstrap_message:
        Content and message of the first commit of an empty repository.
    """

    def __init__(
        self,
        repo_path: Path,
        target_file: str = "foo",
        bootstrap_file: str = "README.md",
        bootstrap_text: str = "TODO",
        bootstrap_message: str = "INIT",
    ):
        self.repo_path = Path(repo_path).resolve()
        self.target_file = target_file
        self.bootstrap_file = bootstrap_file
        self.bootstrap_text = bootstrap_text
        self.bootstrap_message = bootstrap_message
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            try:
                self._repo = Repo(self.repo_path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise RepositoryError(f"Not a valid git repository: {self.repo_path}") from e
        return self._repo

    @property
    def work_tree(self) -> Path:
        return Path(self.repo.working_tree_dir or self.repo_path)

    def is_available(self) -> bool:
        if not GIT_AVAILABLE:
            return False
        try:
            Git().version()
        except (GitCommandError, OSError):
            return False
        return True

    def is_repository(self) -> bool:
        try:
            self.repo
        except RepositoryError:
            return False
        return True

    def initialize(self) -> None:
        try:
            self.repo_path.mkdir(parents=True, exist_ok=True)
            self._repo = Repo.init(self.repo_path)
        except (GitCommandError, OSError) as e:
            raise RepositoryError(f"Error initializing Git repository: {e}") from e

    def is_clean(self) -> bool:
        try:
            return not self.repo.is_dirty(untracked_files=True)
        except GitCommandError as e:
            raise RepositoryError(f"Error checking if repository is clean: {e}") from e

    def _commit(self, instant: datetime, message: str, *flags: str) -> None:
        date = stringify(instant)
        self.repo.git.add(A=True)
        self.repo.git.commit(
            "--quiet",
            *flags,
            "--date",
            date,
            "-m",
            message,
            env={"GIT_COMMITTER_DATE": date},
        )

    def commit_at(self, instant: datetime, message: str) -> None:
        date = stringify(instant)
        try:
            (self.work_tree / self.target_file).write_text(f'"{date}"\n', encoding="utf-8")
            self._commit(instant, message, "--allow-empty")
        except (GitCommandError, OSError) as e:
            raise RepositoryError(f"Error committing for date {date}: {e}") from e

    def commit_all(self, instant: datetime, message: str) -> None:
        try:
            # --allow-empty keeps a squash of a single-commit history valid
            self._commit(instant, message, "--allow-empty")
        except GitCommandError as e:
            raise RepositoryError(f"Error committing working tree: {e}") from e

    def bootstrap(self, instant: datetime) -> None:
        try:
            (self.work_tree / self.bootstrap_file).write_text(
                f"{self.bootstrap_text}\n", encoding="utf-8"
            )
            self._commit(instant, self.bootstrap_message)
        except (GitCommandError, OSError) as e:
            raise RepositoryError(f"Error creating initial commit: {e}") from e

    def commit_count(self) -> int:
        try:
            if not self.repo.head.is_valid():
                return 0
            return int(self.repo.git.rev_list("--count", "HEAD").strip())
        except (GitCommandError, ValueError) as e:
            raise RepositoryError(f"Error counting commits: {e}") from e

    def current_head(self) -> str:
        try:
            return self.repo.head.commit.hexsha
        except (GitCommandError, ValueError) as e:
            raise RepositoryError(f"Error saving current commit hash: {e}") from e

    def hard_reset(self, handle: str) -> None:
        try:
            self.repo.git.reset("--hard", handle)
        except GitCommandError as e:
            raise RepositoryError(
                f"Error performing hard reset to commit {handle}: {e}"
            ) from e

    def root_handle(self) -> str:
        try:
            roots = self.repo.git.rev_list("--max-parents=0", "HEAD").split()
        except GitCommandError as e:
            raise RepositoryError(f"Error finding root commit: {e}") from e
        if not roots:
            raise RepositoryError("Error finding root commit: repository has no commits")
        # rev-list lists newest first; the oldest root is last
        return roots[-1]

    def soft_reset_to_root(self) -> None:
        root = self.root_handle()
        try:
            self.repo.git.reset("--soft", root)
        except GitCommandError as e:
            raise RepositoryError(f"Error resetting repository: {e}") from e
