"""In-memory repository driver for sequencer tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Set

from commitpaint.errors import RepositoryError
from commitpaint.git.driver import RepositoryDriver


@dataclass(slots=True)
class FakeCommit:
    handle: str
    instant: datetime
    message: str


class FakeDriver(RepositoryDriver):
    def __init__(
        self,
        available: bool = True,
        repository: bool = True,
        clean: bool = True,
        existing: int = 0,
        fail_at: Set[int] | None = None,
        fail_reset: bool = False,
    ):
        self.available = available
        self.repository = repository
        self.clean = clean
        self.fail_at = fail_at or set()
        self.fail_reset = fail_reset
        self.commits: List[FakeCommit] = []
        self.calls: List[str] = []
        self.attempts = 0
        self._counter = 0
        for _ in range(existing):
            self._append(datetime(2000, 1, 1), "existing")

    def _append(self, instant: datetime, message: str) -> None:
        self._counter += 1
        self.commits.append(FakeCommit(f"c{self._counter}", instant, message))

    @property
    def messages(self) -> List[str]:
        return [commit.message for commit in self.commits]

    def is_available(self) -> bool:
        self.calls.append("is_available")
        return self.available

    def is_repository(self) -> bool:
        self.calls.append("is_repository")
        return self.repository

    def initialize(self) -> None:
        self.calls.append("initialize")
        self.repository = True

    def is_clean(self) -> bool:
        self.calls.append("is_clean")
        return self.clean

    def commit_at(self, instant: datetime, message: str) -> None:
        self.attempts += 1
        if self.attempts in self.fail_at:
            raise RepositoryError(f"Error committing for date {message}: boom")
        self._append(instant, message)

    def commit_all(self, instant: datetime, message: str) -> None:
        self.calls.append("commit_all")
        self._append(instant, message)
        self.clean = True

    def bootstrap(self, instant: datetime) -> None:
        self.calls.append("bootstrap")
        self._append(instant, "INIT")

    def commit_count(self) -> int:
        return len(self.commits)

    def current_head(self) -> str:
        return self.commits[-1].handle

    def hard_reset(self, handle: str) -> None:
        self.calls.append("hard_reset")
        if self.fail_reset:
            raise RepositoryError(f"Error performing hard reset to commit {handle}: boom")
        handles = [commit.handle for commit in self.commits]
        del self.commits[handles.index(handle) + 1:]

    def root_handle(self) -> str:
        return self.commits[0].handle

    def soft_reset_to_root(self) -> None:
        self.calls.append("soft_reset_to_root")
        del self.commits[1:]
