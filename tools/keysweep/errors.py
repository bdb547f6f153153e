from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_NOT_FOUND = 3
EXIT_INVALID_CONFIG = 4
EXIT_IO = 5
EXIT_DIVERGED = 6


class KeysweepError(RuntimeError):
    exit_code = EXIT_IO

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotFoundError(KeysweepError):
    exit_code = EXIT_NOT_FOUND


class InvalidConfigError(KeysweepError):
    exit_code = EXIT_INVALID_CONFIG


class SourceReadError(KeysweepError):
    exit_code = EXIT_IO


class DictionaryWriteError(KeysweepError):
    """Saving failed after keys were already dropped from the in-memory dictionary.

    The file on disk still holds the removed keys, so whatever was reported as
    removed is not what the file contains.
    """

    exit_code = EXIT_DIVERGED

    def __init__(self, path: Union[str, Path], removed: List[str], reason: str) -> None:
        message = (
            f"Unable to save {path}: {reason}. "
            f"{len(removed)} key(s) were removed in memory only; the file no longer matches the report"
        )
        super().__init__(message, path)
        self.removed = list(removed)
