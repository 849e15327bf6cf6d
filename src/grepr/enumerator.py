"""Resolve search targets into an ordered sequence of input sources.

Each target resolves in place, so the overall order is the concatenation of
per-target resolutions in the order targets were given. Directories are walked
depth-first with entries sorted by name at every level. A directory whose
``(st_dev, st_ino)`` matches one of its ancestors (reached through a symlink) is
skipped, which guarantees termination.

Failures are yielded, not raised: a target that cannot be resolved produces a
:class:`SourceUnavailableError` at its position and enumeration continues.
"""

import logging
import os
import stat
from collections.abc import Iterator, Sequence

from .errors import SourceIsDirectoryError, SourceUnavailableError
from .sources import STDIN_TARGET, InputSource

logger = logging.getLogger(__name__)

type ResolvedSource = InputSource | SourceUnavailableError

# Prefix inspected by the binary rule; a NUL byte in it marks the file binary
BINARY_SNIFF_SIZE = 8192

type _DirIdentity = tuple[int, int]


def enumerate_sources(
    targets: Sequence[str], *, recursive: bool = False, skip_binary: bool = False
) -> Iterator[ResolvedSource]:
    """Yield one entry per source to scan, or per target that failed to resolve.

    Args:
        targets: Paths, or ``"-"`` for standard input. Empty means standard input.
        recursive: Descend into directory targets instead of rejecting them.
        skip_binary: Drop files whose leading bytes contain a NUL byte.

    """
    if not targets:
        yield InputSource.stdin()
        return

    for target in targets:
        if target == STDIN_TARGET:
            yield InputSource.stdin()
        else:
            yield from _resolve_path(target, recursive=recursive, skip_binary=skip_binary)


def looks_binary(path: str) -> bool:
    """Check the first ``BINARY_SNIFF_SIZE`` bytes of a file for a NUL byte.

    Unreadable files are reported as text; opening them fails later with a proper error.
    """
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_SNIFF_SIZE)
    except OSError:
        return False
    return b"\x00" in chunk


def _resolve_path(target: str, *, recursive: bool, skip_binary: bool) -> Iterator[ResolvedSource]:
    try:
        st = os.stat(target)
    except OSError as e:
        logger.debug("can't resolve %s: %s", target, e.strerror or e)
        yield SourceUnavailableError.from_os_error(target, e)
        return

    if stat.S_ISDIR(st.st_mode):
        if not recursive:
            logger.debug("%s is a directory, use --recursive to search it", target)
            yield SourceIsDirectoryError(target)
            return
        yield from _walk(target, ancestors=frozenset({_identity(st)}), skip_binary=skip_binary)
        return

    # explicit non-directory targets (regular files, fifos, devices) are read as given;
    # only regular files are sniffed, reading a pipe here would consume its data
    yield from _file_source(target, skip_binary=skip_binary and stat.S_ISREG(st.st_mode))


def _walk(directory: str, *, ancestors: frozenset[_DirIdentity], skip_binary: bool) -> Iterator[ResolvedSource]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug("can't list %s: %s", directory, e.strerror or e)
        yield SourceUnavailableError.from_os_error(directory, e)
        return

    for entry in entries:
        try:
            # follows symlinks, so linked directories are descended and linked files read
            st = entry.stat()
        except OSError as e:
            logger.debug("can't stat %s: %s", entry.path, e.strerror or e)
            yield SourceUnavailableError.from_os_error(entry.path, e)
            continue

        if stat.S_ISDIR(st.st_mode):
            identity = _identity(st)
            if identity in ancestors:
                logger.debug("skipping %s: links back to an ancestor directory", entry.path)
                continue
            yield from _walk(entry.path, ancestors=ancestors | {identity}, skip_binary=skip_binary)
        elif stat.S_ISREG(st.st_mode):
            yield from _file_source(entry.path, skip_binary=skip_binary)
        else:
            logger.debug("skipping %s: not a regular file", entry.path)


def _file_source(path: str, *, skip_binary: bool) -> Iterator[ResolvedSource]:
    if skip_binary and looks_binary(path):
        logger.debug("skipping binary file %s", path)
        return
    yield InputSource.file(path)


def _identity(st: os.stat_result) -> _DirIdentity:
    return st.st_dev, st.st_ino
