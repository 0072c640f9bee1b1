"""File system utilities."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_file(path: Path) -> Any:
    """Read and decode a JSON file.

    Args:
        path: Path to the file.

    Returns:
        Decoded JSON value.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to a file by replacing it atomically.

    The content is written to a temporary file in the same directory and
    moved over the target, so readers never observe a partial file.

    Args:
        path: Target path.
        content: Text to write.

    Raises:
        OSError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
