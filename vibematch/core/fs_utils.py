"""File primitives behind the JSON document store.

The store file is the only copy of users, swipes and matches, so these
helpers never guess: a file that does not decode is reported to the caller
instead of being replaced, and writers coordinate through an advisory lock
file shared by every process that opens the same store.
"""

from contextlib import contextmanager
import fcntl
import json
import os
from pathlib import Path
import tempfile
from typing import Any, Iterator


def ensure_parent_dir(path: Path | str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def lock_path_for(path: Path | str) -> Path:
    """Sidecar lock file of a data file: `store.json` -> `store.json.lock`."""
    target = Path(path)
    return target.with_name(f"{target.name}.lock")


@contextmanager
def file_lock(path: Path | str) -> Iterator[None]:
    """
    Hold an exclusive advisory lock on `path` for the duration of the block.

    flock() locks belong to the open file description, so two handles on the
    same lock file exclude each other whether they live in different
    processes or in different threads of one process.
    """
    ensure_parent_dir(path)
    with open(path, "a+b") as handle:
        fcntl.flock(handle, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(handle, fcntl.LOCK_UN)


def write_json(path: Path | str, data: Any) -> None:
    """Replace `path` with `data` serialised as JSON, all or nothing."""
    target = Path(path)
    ensure_parent_dir(target)

    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            json.dump(data, tmp, ensure_ascii=False, indent=2, sort_keys=True)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, target)
    except Exception:
        Path(tmp.name).unlink(missing_ok=True)
        raise


def read_json(path: Path | str, default: Any = None) -> Any:
    """
    Load the JSON document at `path`; `default` if the file does not exist.

    A file that exists but does not decode raises ValueError
    (json.JSONDecodeError or UnicodeDecodeError).
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
