"""File I/O utilities for reading configuration and writing pipeline outputs."""

import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console(stderr=True)


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> Path:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            path = path.with_suffix(".csv")
            df.to_csv(path, index=False)
        case "json":
            path = path.with_suffix(".json")
            df.to_json(path, orient="records", indent=2)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
    return path


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file using Python 3.11+ stdlib."""
    with open(path, "rb") as f:
        return tomllib.load(f)
