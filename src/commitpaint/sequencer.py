"""Drive a repository through pre-flight, apply and rollback.

A run moves through the stages of :class:`Stage` in order. Pre-flight and
validation failures raise before any generated commit exists. Once the head
has been snapshotted, a failure no longer raises: it leads to a rollback and
is reported through the :class:`Outcome` of the returned
:class:`SequenceResult`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .errors import (
    CommitFailure,
    CommitPaintError,
    DirtyRepositoryError,
    RangeError,
    RepositoryError,
    RollbackFailure,
    ToolUnavailableError,
)
from .flags import consider_flag, describe_flag
from .git.driver import RepositoryDriver
from .temporal.timestamps import (
    far_future_sentinel,
    format_milliseconds,
    stringify,
    year_window,
)

logger = logging.getLogger(__name__)

# Rough per-commit cost of the git calls, used for the time estimate only.
COMMIT_OVERHEAD_MS = 100


class Stage(Enum):
    PREFLIGHT = "preflight"
    VALIDATE = "validate"
    SNAPSHOT = "snapshot"
    APPLY = "apply"
    ROLLBACK = "rollback"
    DONE = "done"


class Outcome(Enum):
    SUCCESS = "success"
    ABORTED_AND_ROLLED_BACK = "aborted_and_rolled_back"
    ABORTED_ROLLBACK_FAILED = "aborted_rollback_failed"

    @property
    def exit_code(self) -> int:
        return {
            Outcome.SUCCESS: 0,
            Outcome.ABORTED_AND_ROLLED_BACK: 3,
            Outcome.ABORTED_ROLLBACK_FAILED: 4,
        }[self]


@dataclass(slots=True)
class SequencerPolicy:
    """Run-wide behaviour switches.

    Attributes
    ----------
    lenient:
        Skip out-of-range instants and failed commits instead of aborting.
    cleanse_message:
        When set, uncommitted changes are saved to a far-future commit with
        this message instead of aborting.
    reset_message:
        When set, existing history is squashed into one far-future commit
        with this message.
    throttle_ms:
        Pause between two generated commits.
    """

    lenient: bool = False
    cleanse_message: Optional[str] = None
    reset_message: Optional[str] = None
    throttle_ms: int = 50


@dataclass(slots=True)
class SkippedInstant:
    instant: datetime
    reason: str


@dataclass(slots=True)
class SequenceResult:
    outcome: Outcome
    committed: List[datetime] = field(default_factory=list)
    skipped: List[SkippedInstant] = field(default_factory=list)
    snapshot: Optional[str] = None
    error: Optional[CommitPaintError] = None

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code


class CommitSequencer:
    """Create one commit per instant on top of a prepared repository.

    Parameters
    ----------
    driver:
        Repository backend.
    policy:
        Leniency, cleanse, reset and throttle settings.
    sleep:
        Called with a number of seconds between commits.
    now:
        Reference time for the far-future sentinel and the year window.
    progress:
        Called with ``(done, total)`` after every attempted commit.
    """

    def __init__(
        self,
        driver: RepositoryDriver,
        policy: Optional[SequencerPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        now: Optional[datetime] = None,
        progress: Optional[Callable[[int, int], None]] = None,
    ):
        self.driver = driver
        self.policy = policy or SequencerPolicy()
        self.sleep = sleep
        self.now = now
        self.progress = progress
        self.stage = Stage.PREFLIGHT

    @property
    def sentinel(self) -> datetime:
        return far_future_sentinel(self.now)

    def preflight(self) -> None:
        """Make sure the repository can receive generated commits.

        Raises
        ------
        ToolUnavailableError:
            If git cannot be executed.
        DirtyRepositoryError:
            If there are uncommitted changes and no cleanse policy is set.
        RepositoryError:
            If any of the preparatory git operations fail.
        """
        self.stage = Stage.PREFLIGHT
        driver = self.driver

        logger.info("➡️  Checking command availability...")
        available = driver.is_available()
        logger.info("\t%s git", "✅" if available else "❌")
        if not available:
            raise ToolUnavailableError(
                "Aborting, cannot continue without Git, please ensure it is installed and accessible."
            )

        logger.info("➡️  Checking if directory is a Git repository...")
        if not driver.is_repository():
            logger.info("🔀  Directory is not a repository. Initializing...")
            driver.initialize()
            logger.info("\t✅ Git repository initialized.")
        else:
            logger.info("\t✅")

        logger.info("➡️  Checking if repository is clean...")
        if not driver.is_clean():
            if self.policy.cleanse_message is None:
                raise DirtyRepositoryError(
                    "Aborting, repository is not clean, there are uncommitted changes."
                    + consider_flag("cleanse")
                )
            logger.info("🔀 Repository is not clean, cleaning up...")
            driver.commit_all(self.sentinel, self.policy.cleanse_message)
            logger.info("\t✅ Uncommitted changes have been saved to a future commit.")
        else:
            logger.info("\t✅")

        count = driver.commit_count()
        if not count:
            logger.info("➡️  Creating the first commit for technical reasons...")
            driver.bootstrap(self.sentinel)
            logger.info("\t✅")
        else:
            logger.info("⚠️  There are already %d commits present!", count)
            if self.policy.reset_message is not None:
                logger.info("🔀 Reset enabled, hiding previous commits...")
                driver.squash_all_into_one(self.sentinel, self.policy.reset_message)
                logger.info("\t✅ Reset is done.")
                logger.warning(
                    "\tDONT FORGET TO USE git push origin --force TO OVERRIDE THE REMOTE "
                    "HISTORY WITH YOUR LOCAL ONE IF NECESSARY!"
                )
            else:
                logger.info(
                    "⏭️  Ignoring them. For different behavior consider using:\n%s",
                    describe_flag("reset"),
                )

    def check_range(self, instant: datetime) -> None:
        """Raise :class:`RangeError` unless ``instant`` lies in the accepted year window."""
        low, high = year_window(self.now)
        if instant.year < low:
            raise RangeError(f"Date cannot be before {low}.")
        if instant.year >= high:
            raise RangeError(f"Date cannot be after {high - 1}.")

    def validate(self, instants: Sequence[datetime]) -> tuple[List[datetime], List[SkippedInstant]]:
        """Split ``instants`` into accepted ones and lenient skips.

        Raises
        ------
        RangeError:
            For the first out-of-range instant when the policy is strict.
        """
        self.stage = Stage.VALIDATE
        accepted: List[datetime] = []
        skipped: List[SkippedInstant] = []
        for instant in instants:
            try:
                self.check_range(instant)
            except RangeError as e:
                if not self.policy.lenient:
                    raise RangeError(
                        f'One of the dates are not acceptable: "{stringify(instant)}": {e}'
                        + consider_flag("let-it-go")
                    ) from e
                logger.info('\t❌ Date is not acceptable: "%s": %s', stringify(instant), e)
                skipped.append(SkippedInstant(instant, str(e)))
                continue
            accepted.append(instant)
        return accepted, skipped

    def snapshot(self) -> str:
        self.stage = Stage.SNAPSHOT
        logger.info("➡️  Saving current state of the repository...")
        head = self.driver.current_head()
        logger.info("\t✅")
        return head

    def _apply(self, instants: Sequence[datetime], result: SequenceResult) -> Optional[CommitFailure]:
        """Create the commits; return the failure that must trigger a rollback, if any."""
        self.stage = Stage.APPLY
        total = len(instants)
        logger.info("➡️  Creating %d commits...", total)
        logger.info(
            "\tEstimated time: %s",
            format_milliseconds(total * (self.policy.throttle_ms + COMMIT_OVERHEAD_MS)),
        )

        for index, instant in enumerate(instants, start=1):
            date = stringify(instant)
            try:
                self.driver.commit_at(instant, date)
            except RepositoryError as e:
                if not self.policy.lenient:
                    return CommitFailure(
                        f"Error committing for date: {date}: {e}" + consider_flag("let-it-go")
                    )
                logger.info('\t❌ Error committing for date: "%s": %s', date, e)
                result.skipped.append(SkippedInstant(instant, str(e)))
            else:
                result.committed.append(instant)
            if self.progress is not None:
                self.progress(index, total)
            if index < total and self.policy.throttle_ms:
                self.sleep(self.policy.throttle_ms / 1000)
        return None

    def _rollback(self, result: SequenceResult, failure: CommitFailure) -> SequenceResult:
        self.stage = Stage.ROLLBACK
        logger.error("🟥 %s", failure)
        logger.info("🔀 Reseting repository to the saved state...")
        try:
            self.driver.hard_reset(result.snapshot)
        except RepositoryError as e:
            error = RollbackFailure(
                f"Rollback to {result.snapshot} failed, the repository may contain "
                f"commits from the failed run: {e}"
            )
            error.__cause__ = failure
            logger.error("🟥 %s", error)
            result.outcome = Outcome.ABORTED_ROLLBACK_FAILED
            result.error = error
            return result

        logger.info("\t✅ Hard reset was successful.")
        result.committed = []
        result.outcome = Outcome.ABORTED_AND_ROLLED_BACK
        result.error = failure
        return result

    def apply(self, instants: Sequence[datetime]) -> SequenceResult:
        """Run every stage for ``instants`` and report the terminal outcome."""
        self.preflight()
        accepted, skipped = self.validate(instants)
        result = SequenceResult(outcome=Outcome.SUCCESS, skipped=skipped)
        result.snapshot = self.snapshot()

        failure = self._apply(accepted, result)
        if failure is not None:
            result = self._rollback(result, failure)
        else:
            logger.info("\t✅")
            if result.skipped:
                logger.info("⚠️  %d dates were skipped.", len(result.skipped))

        self.stage = Stage.DONE
        return result
