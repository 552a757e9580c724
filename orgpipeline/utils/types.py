"""Shared type definitions for the pipeline."""

import pandas as pd


type ValidationOutcome = dict[str, bool | str | list[str]]
type OutputFormat = str  # "table" | "summary" | "json" | "csv" | "txt"
type IssueFrames = dict[str, pd.DataFrame]
type IssueRow = dict[str, str | int | float | None]
