"""Checks run before any remote call."""

import shutil
from collections.abc import Iterable

import structlog

from b2unhide.errors import EnvironmentCheckError

logger = structlog.get_logger()


def find_missing_commands(commands: Iterable[str]) -> list[str]:
    """Return the commands that cannot be resolved on PATH."""
    return [command for command in commands if shutil.which(command) is None]


def ensure_environment(commands: Iterable[str]) -> None:
    """Raise EnvironmentCheckError naming every missing executable."""
    commands = list(commands)
    missing = find_missing_commands(commands)
    if missing:
        logger.error("environment_check_failed", missing=missing)
        raise EnvironmentCheckError(missing)
    logger.debug("environment_check_passed", commands=commands)
