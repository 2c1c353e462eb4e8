"""Integrity checks for the command line flag table."""

from __future__ import annotations

from collections import Counter

from commitpaint.flags import ALL_FLAGS, describe_flag, help_text


def test_no_duplicate_flag_names() -> None:
    counts = Counter(flag.name for flag in ALL_FLAGS)
    assert [name for name, count in counts.items() if count > 1] == []


def test_no_duplicate_flag_aliases() -> None:
    counts = Counter(flag.alias for flag in ALL_FLAGS if flag.alias)
    assert [alias for alias, count in counts.items() if count > 1] == []


def test_describe_flag_mentions_default_and_fallback() -> None:
    assert '"+"' in describe_flag("direction")
    assert "-d" in describe_flag("direction")
    assert '"CLEANSE"' in describe_flag("cleanse")


def test_help_lists_every_flag() -> None:
    text = help_text()
    for flag in ALL_FLAGS:
        assert f"--{flag.name}" in text
