#!/usr/bin/env python3
"""
Portfolio Utilities - Shared errors and helpers for the build scripts.
"""

import os
import subprocess
from pathlib import Path
from typing import Optional, Sequence


class PipelineError(Exception):
    """Base class for known pipeline failures."""


class ConfigError(PipelineError):
    """A required configuration value is missing."""


class NoInputImagesError(PipelineError):
    """The input directory holds no accepted master images."""


class CommandError(PipelineError):
    """An external command exited with a non-zero status."""


class ContentError(PipelineError):
    """A portfolio content file failed validation."""


def get_env(name: str, fallback: Optional[str] = None) -> str:
    """
    Return an environment variable, or raise ConfigError if it is unset or empty.

    Args:
        name: Variable name
        fallback: Value used when the variable is not set
    """
    value = os.getenv(name, fallback)
    if value is None or value == "":
        raise ConfigError(f"Missing env var: {name}")
    return value


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def run(cmd: str, args: Sequence[str]) -> None:
    """Run a command with inherited stdio; raise CommandError on non-zero exit."""
    result = subprocess.run([cmd, *args])
    if result.returncode != 0:
        raise CommandError(f"{cmd} exited with code {result.returncode}")
