"""Runtime settings that are not exposed as individual command line flags."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigError


@dataclass(slots=True)
class PaintConfig:
    """Runtime configuration for one run.

    Attributes
    ----------
    throttle_ms:
        Pause between two generated commits, in milliseconds.
    target_file:
        File rewritten with the commit date on every generated commit.
    bootstrap_file:
        File written by the first commit of an empty repository.
    bootstrap_text:
        Content of ``bootstrap_file``.
    bootstrap_message:
        Message of the bootstrap commit.
    """

    throttle_ms: int = 50
    target_file: str = "foo"
    bootstrap_file: str = "README.md"
    bootstrap_text: str = "TODO"
    bootstrap_message: str = "INIT"

    @classmethod
    def load(cls, path: Path) -> "PaintConfig":
        """Return the defaults overridden by the JSON object stored at ``path``.

        Raises
        ------
        ConfigError:
            If the file is missing, is not a JSON object, or names unknown keys.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls().merged(data)

    def merged(self, overrides: Dict[str, Any]) -> "PaintConfig":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key == "throttle_ms":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ConfigError("throttle_ms must be a non-negative integer")
            elif not isinstance(value, str):
                raise ConfigError(f"{key} must be a string")
            values[key] = value
        return replace(self, **values)
