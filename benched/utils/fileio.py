"""File IO helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd


def ensure_dir(path: Path) -> Path:
    """Ensure that a directory exists."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def write_delimited(headers: Sequence[str], rows: List[Sequence[str]], path: Path, delimiter: str = ";") -> None:
    """Write pre-formatted string cells as a delimited text file."""

    ensure_dir(path.parent)
    df = pd.DataFrame(list(rows), columns=list(headers), dtype=str)
    df.to_csv(path, sep=delimiter, index=False, lineterminator="\n")


def write_yaml(data: Any, path: Path) -> None:
    """Serialize data to YAML file."""

    import yaml

    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh)


__all__ = ["ensure_dir", "write_delimited", "write_yaml"]
