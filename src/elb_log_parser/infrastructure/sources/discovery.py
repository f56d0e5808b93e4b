"""
Input discovery: turn a path argument into the files to convert.
"""

import os
from pathlib import Path
from typing import Iterator

from elb_log_parser.core.exceptions import InputError, InputNotFoundError, PermissionDeniedError
from elb_log_parser.core.models import InputDescriptor

__all__ = ["STDIN_PATH", "discover_inputs"]


STDIN_PATH = "-"


def discover_inputs(path: str | Path) -> Iterator[InputDescriptor]:
    """
    Yield the inputs named by a path argument, in a deterministic order.

    - "-" yields a single standard input descriptor.
    - A regular file yields itself.
    - A directory yields every regular file beneath it, ordered by the
      path components relative to the directory. Hidden files are
      included. Symlinks to files are followed, symlinked directories
      are not descended into.

    Files are never opened here.

    Args:
        path: Directory, file, or "-"

    Yields:
        InputDescriptor for each input

    Raises:
        InputNotFoundError: If the path does not exist
        PermissionDeniedError: If the path or anything beneath it is unreadable
        InputError: If a directory cannot be listed for another reason
    """
    if str(path) == STDIN_PATH:
        yield InputDescriptor.stdin()
        return

    root = Path(path)
    if not root.exists():
        raise InputNotFoundError(str(root))
    _check_readable(root)

    if not root.is_dir():
        yield InputDescriptor(root)
        return

    for file_path in _walk_sorted(root):
        _check_readable(file_path)
        yield InputDescriptor(file_path)


def _walk_sorted(root: Path) -> list[Path]:
    def on_error(error: OSError) -> None:
        path = error.filename or str(root)
        if isinstance(error, PermissionError):
            raise PermissionDeniedError(path) from error
        raise InputError(f"Cannot list {path}: {error.strerror or error}", path=path) from error

    found = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if candidate.is_file():
                found.append(candidate)

    return sorted(found, key=lambda p: p.relative_to(root).parts)


def _check_readable(path: Path) -> None:
    # Directories also need execute permission to be listed.
    mode = os.R_OK | os.X_OK if path.is_dir() else os.R_OK
    if not os.access(path, mode):
        raise PermissionDeniedError(str(path))
