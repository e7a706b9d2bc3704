"""Candidate name generation for temporary files."""

from __future__ import annotations

import logging
import os
import random

from .errors import NameGenerationError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "file"
PREFIX_MAX_CHARS = 5
RANDOM_CHARS = 6
FALLBACK_DIR = "/tmp"

_CHARACTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"


def _usable_dir(path: str | os.PathLike[str] | None) -> bool:
    if not path:
        return False
    return os.path.isdir(path) and os.access(path, os.W_OK | os.X_OK)


def resolve_directory(directory: str | None, env_tmpdir: str | None = None) -> str:
    """Pick the directory new candidates are placed in.

    An explicit *directory* must be usable as given. Otherwise the first
    usable of *env_tmpdir* and ``/tmp`` wins.
    """
    if directory is not None:
        if not _usable_dir(directory):
            raise NameGenerationError(f"{directory}: not a writable directory")
        return directory
    for candidate in (env_tmpdir, FALLBACK_DIR):
        if _usable_dir(candidate):
            return str(candidate)
    raise NameGenerationError("no usable temporary directory found")


def compose_suffix(candidate: str, suffix: str | None) -> str:
    """Append *suffix* to *candidate*.

    Only the base name was checked by the generator; a collision the suffix
    brings back is left to the exclusive create.
    """
    if not suffix:
        return candidate
    return candidate + suffix


class NameGenerator:
    """Produces paths of the form ``DIR/PREFIX + six random characters``.

    Names are never repeated within one generator and are skipped when the
    path already exists at generation time.
    """

    def __init__(
        self,
        directory: str,
        prefix: str | None = None,
        *,
        max_attempts: int = 10000,
        rng: random.Random | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        self.directory = directory
        self.prefix = (DEFAULT_PREFIX if prefix is None else prefix)[:PREFIX_MAX_CHARS]
        self.max_attempts = max_attempts
        self._rng = rng
        self._rng_pid: int | None = None
        # Base names handed out so far. A base can be free on disk while its
        # suffixed form collided, so lexists alone does not rule out a repeat.
        self._issued: set[str] = set()

    @property
    def rng(self) -> random.Random:
        # A forked child must not replay the parent's sequence.
        cur_pid = os.getpid()
        if self._rng is None or (self._rng_pid is not None and self._rng_pid != cur_pid):
            self._rng = random.Random()
            self._rng_pid = cur_pid
        return self._rng

    def _random_part(self) -> str:
        return "".join(self.rng.choice(_CHARACTERS) for _ in range(RANDOM_CHARS))

    def next_candidate(self) -> str:
        for _ in range(self.max_attempts):
            candidate = os.path.join(self.directory, self.prefix + self._random_part())
            if candidate in self._issued:
                continue
            if os.path.lexists(candidate):
                logger.debug("Skipping existing name %s", candidate)
                continue
            self._issued.add(candidate)
            return candidate
        raise NameGenerationError(
            f"{self.directory}: no unused name after {self.max_attempts} attempts"
        )
