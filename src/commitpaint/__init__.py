"""commitpaint package.

Resolves dates and relative day offsets into commit instants and writes one
backdated git commit per instant, with rollback when a run fails midway.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "errors",
    "flags",
    "git",
    "logger",
    "sequencer",
    "temporal",
]
