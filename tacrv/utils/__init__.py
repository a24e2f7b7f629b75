import os
from typing import Iterable


def write_lines(path: str, lines: Iterable[str]):
    """Writes `lines` to `path`, one per line, creating parent directories."""
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(path, "w") as out:
        for line in lines:
            out.write(line + "\n")
