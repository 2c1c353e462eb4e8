"""Command line flag table.

The table drives both the argument parser and the flag descriptions quoted
in error messages, so an operator who hits a failure is pointed at the flag
that changes the behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class FlagDefinition:
    """A single command line option.

    Attributes
    ----------
    name:
        Long option name without the leading dashes.
    description:
        Help text shown by ``--help`` and by :func:`describe_flag`.
    alias:
        Optional single-letter short option.
    kind:
        ``"bool"`` for switches, ``"string"`` for options carrying a value.
    default:
        Value used when the option is absent.
    fallback:
        Value used when the option is present without a value. Options with
        a fallback stay unset unless the operator passes them.
    metavar:
        Placeholder shown in usage text.
    """

    name: str
    description: str
    alias: Optional[str] = None
    kind: str = "bool"
    default: Optional[str] = None
    fallback: Optional[str] = None
    metavar: Optional[str] = None

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    def option_strings(self) -> list[str]:
        options = [f"--{self.name}"]
        if self.alias:
            options.insert(0, f"-{self.alias}")
        return options


BOOL_FLAGS: Tuple[FlagDefinition, ...] = (
    FlagDefinition(
        name="help",
        alias="h",
        description="Displays help information about the available flags.",
    ),
    FlagDefinition(
        name="silent",
        description="Suppresses console output of current actions but retains logs in memory.",
    ),
    FlagDefinition(
        name="let-it-go",
        description=(
            "By default, the application deletes all recently created commits (hard reset) "
            "when it encounters an error while creating commits for the currently processed "
            "dates. Setting this flag instructs the app to continue processing despite errors."
        ),
    ),
    FlagDefinition(
        name="no-commit",
        alias="n",
        description="Prevents the execution from proceeding to the commit phase.",
    ),
)

STRING_FLAGS: Tuple[FlagDefinition, ...] = (
    FlagDefinition(
        name="cleanse",
        kind="string",
        fallback="CLEANSE",
        metavar="MESSAGE",
        description=(
            "Prevents execution from halting when the repository is unclean by saving "
            "uncommitted changes to a commit dated far into the future. Unlike the reset "
            "flag, this does not alter the commit history. The flag's value will be used "
            "as the commit message."
        ),
    ),
    FlagDefinition(
        name="reset",
        kind="string",
        fallback="RESET",
        metavar="MESSAGE",
        description=(
            "By default, the application creates commits on top of existing ones if any. "
            "Setting this flag squashes and hides all previous commits in a commit dated "
            "far into the future while keeping the changes. The flag's value will be used "
            "as the commit message."
        ),
    ),
    FlagDefinition(
        name="direction",
        alias="d",
        kind="string",
        default="+",
        metavar="{+,-}",
        description=(
            "Determines how relative day numbers are converted to dates. For example, "
            "'-d + 1990-12-23 3' results in [1990-12-23, 1990-12-26], whereas '-' results "
            "in [1990-12-23, 1990-12-20]. Relative day numbers set dates relative to the "
            "previous date without entering each full date."
        ),
    ),
    FlagDefinition(
        name="paint",
        alias="p",
        kind="string",
        metavar="LEVEL",
        description=(
            "Paints every day, whether given as a date or reached by a non-zero relative "
            "number, with an intensity level from 0 to 4 by expanding it into the number of "
            "commits the contribution calendar needs for that shade."
        ),
    ),
    FlagDefinition(
        name="throttle",
        kind="string",
        metavar="MS",
        description="Delay in milliseconds between two generated commits.",
    ),
    FlagDefinition(
        name="repo",
        kind="string",
        default=".",
        metavar="PATH",
        description="Repository to write commits into.",
    ),
    FlagDefinition(
        name="config",
        kind="string",
        metavar="PATH",
        description="JSON file overriding the runtime settings (throttle, target file, bootstrap commit).",
    ),
)

ALL_FLAGS: Tuple[FlagDefinition, ...] = BOOL_FLAGS + STRING_FLAGS


def _render(flag: FlagDefinition) -> str:
    lines = [f"  {option}" for option in flag.option_strings()]
    lines.append(f"      {flag.description}")
    text = "\n".join(lines) + "\n"
    if flag.default is not None:
        text += f'\n      default value (is overridden if flag is provided): "{flag.default}"\n'
    if flag.fallback is not None:
        text += f'\n      fallback value (used if flag is present but has no value): "{flag.fallback}"\n'
    return text


_DESCRIPTIONS: Dict[str, str] = {flag.name: _render(flag) for flag in ALL_FLAGS}


def describe_flag(name: str) -> str:
    """Return the rendered help block for flag ``name``."""
    return _DESCRIPTIONS[name]


def consider_flag(name: str) -> str:
    """Suffix appended to errors that a flag would have avoided."""
    return f"\nFor different behavior consider using:\n{describe_flag(name)}"


def help_text() -> str:
    blocks = ["Usage: commitpaint [options] [--] <date|days> ...", "", "Options:"]
    blocks.extend(_DESCRIPTIONS[flag.name] for flag in ALL_FLAGS)
    return "\n".join(blocks)
