"""Atomic, exclusive creation of temporary files."""

from __future__ import annotations

import logging
import os

from .config import TempfileConfig
from .errors import AlreadyExistsError, CloseError, CreationError, NameGenerationError
from .naming import NameGenerator, compose_suffix, resolve_directory

logger = logging.getLogger(__name__)

_OPEN_FLAGS = os.O_RDWR | os.O_CREAT | os.O_EXCL
_OPEN_FLAGS |= getattr(os, "O_NOFOLLOW", 0)
_OPEN_FLAGS |= getattr(os, "O_CLOEXEC", 0)
_OPEN_FLAGS |= getattr(os, "O_BINARY", 0)


def create_exclusive(path: str, mode: int) -> None:
    """Create *path* as a new empty file, failing if anything is already there.

    The descriptor is closed before returning. Creation and the existence
    check are a single ``O_EXCL`` open.
    """
    try:
        fd = os.open(path, _OPEN_FLAGS, mode)
    except FileExistsError as exc:
        raise AlreadyExistsError(path, exc) from exc
    except OSError as exc:
        raise CreationError(path, exc) from exc

    try:
        os.close(fd)
    except OSError as exc:
        raise CloseError(path, exc) from exc


def create_named(name: str, mode: int) -> str:
    """Create exactly *name*. A pre-existing file is an error, never retried."""
    create_exclusive(name, mode)
    logger.debug("Created %s", name)
    return name


def create_temp_file(config: TempfileConfig, generator: NameGenerator | None = None) -> str:
    """Create a file under a freshly generated name and return its path.

    Collisions are retried with a new candidate up to ``config.max_attempts``
    times in total; every other failure propagates.
    """
    if generator is None:
        directory = resolve_directory(config.directory, config.tmpdir)
        generator = NameGenerator(directory, config.prefix, max_attempts=config.max_attempts)

    for attempt in range(1, config.max_attempts + 1):
        path = compose_suffix(generator.next_candidate(), config.suffix)
        try:
            create_exclusive(path, config.mode)
        except AlreadyExistsError:
            logger.debug("Collision on %s (attempt %d); retrying", path, attempt)
            continue
        logger.debug("Created %s after %d attempt(s)", path, attempt)
        return path

    raise NameGenerationError(f"gave up after {config.max_attempts} colliding names")


def create(config: TempfileConfig) -> str:
    if config.explicit:
        if config.directory or config.prefix or config.suffix:
            logger.debug("--name given; ignoring directory, prefix and suffix")
        return create_named(config.name, config.mode)  # type: ignore[arg-type]
    return create_temp_file(config)
