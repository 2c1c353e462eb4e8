"""Create backdated commits so the contribution calendar shows a chosen pattern.

Positional arguments are absolute dates (YYYY-MM-DD) or relative day numbers
measured from the previous date. Put them after ``--`` when a value-taking
flag such as ``--cleanse`` comes right before them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from .config import PaintConfig
from .errors import CommitPaintError, ConfigError
from .flags import BOOL_FLAGS, STRING_FLAGS, help_text
from .git.driver import GitDriver
from .logger import configure_logging, prelog
from .sequencer import CommitSequencer, Outcome, SequencerPolicy
from .temporal.paint import expand, parse_level
from .temporal.resolver import Direction, resolve
from .temporal.timestamps import stringify

logger = logging.getLogger("commitpaint")

EXIT_FAILURE = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commitpaint", description=__doc__, add_help=False)
    parser.add_argument("tokens", nargs="*", help="Dates (YYYY-MM-DD) or relative day numbers")

    for flag in BOOL_FLAGS:
        parser.add_argument(
            *flag.option_strings(), dest=flag.dest, action="store_true", help=flag.description
        )

    for flag in STRING_FLAGS:
        kwargs = {"dest": flag.dest, "metavar": flag.metavar, "help": flag.description}
        if flag.fallback is not None:
            # absent -> None, bare flag -> fallback, flag with value -> value
            kwargs.update(nargs="?", const=flag.fallback, default=None)
        else:
            kwargs["default"] = flag.default
        parser.add_argument(*flag.option_strings(), **kwargs)

    return parser


def _load_config(args: argparse.Namespace) -> PaintConfig:
    config = PaintConfig.load(Path(args.config)) if args.config else PaintConfig()
    if args.throttle is not None:
        try:
            throttle = int(args.throttle)
        except ValueError as e:
            raise ConfigError(f"--throttle expects milliseconds, got '{args.throttle}'") from e
        config = config.merged({"throttle_ms": throttle})
    return config


def _prepare_tokens(args: argparse.Namespace) -> List[str]:
    tokens = [str(token) for token in args.tokens]
    if args.paint is not None:
        tokens = expand(tokens, parse_level(args.paint))
    return tokens


def _write_progress(done: int, total: int) -> None:
    sys.stdout.write(f"\t⌛ {done}/{total}\r")
    sys.stdout.flush()


def _run(args: argparse.Namespace) -> int:
    config = _load_config(args)
    direction = Direction.from_flag(args.direction)
    tokens = _prepare_tokens(args)

    if not tokens:
        logger.info("🟨 Module stopped: No dates were provided.")
        return 0

    logger.info("➡️  Preparing dates...")
    instants = resolve(tokens, direction)
    logger.info("\t✅ %d dates resolved.", len(instants))

    if args.no_commit:
        for instant in instants:
            logger.info("\t%s", stringify(instant))
        logger.info(
            '🟨 Module stopped: The process was stopped before committing due to the "no-commit" flag.'
        )
        return 0

    driver = GitDriver(
        Path(args.repo),
        target_file=config.target_file,
        bootstrap_file=config.bootstrap_file,
        bootstrap_text=config.bootstrap_text,
        bootstrap_message=config.bootstrap_message,
    )
    policy = SequencerPolicy(
        lenient=args.let_it_go,
        cleanse_message=args.cleanse,
        reset_message=args.reset,
        throttle_ms=config.throttle_ms,
    )
    sequencer = CommitSequencer(
        driver,
        policy,
        progress=None if args.silent else _write_progress,
    )
    result = sequencer.apply(instants)

    if result.outcome is Outcome.SUCCESS:
        logger.info(
            "✅ %d commits created, %d skipped.", len(result.committed), len(result.skipped)
        )
    elif result.outcome is Outcome.ABORTED_AND_ROLLED_BACK:
        logger.error("🟥 Module aborted, repository restored to %s:\n%s", result.snapshot, result.error)
    else:
        logger.error(
            "🟥 Module aborted and ROLLBACK FAILED, the repository is left partially modified:\n%s",
            result.error,
        )
    return result.exit_code


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args, unknown = parser.parse_known_intermixed_args(
        list(argv) if argv is not None else None
    )
    for arg in unknown:
        prelog(f"⚠️  Unknown option: {arg}")

    if args.help:
        print(help_text())
        return 0

    configure_logging(silent=args.silent)
    try:
        return _run(args)
    except CommitPaintError as e:
        logger.error("🟥 Module failed:\n%s", e)
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
