"""Data validation utilities using pandera."""

import pandera as pa
import pandas as pd
from pandera import DataFrameSchema

from orgpipeline.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate a DataFrame against a pandera schema, collecting every failure.

    Row-level failures are labelled with the DataFrame index, so callers that
    index by file line number get line-accurate messages.
    """
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val, "index": idx} if pd.notna(idx):
                    errors.append(f"line {int(idx)}: column '{col}' failed check '{check}': {val!r}")
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val!r}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}


def validate_no_nulls(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that specified columns have no null values."""
    issues = []
    for col in columns:
        null_rows = df.index[df[col].isnull()].tolist()
        if null_rows:
            lines = ", ".join(str(i) for i in null_rows[:5])
            issues.append(f"Column '{col}' is empty on line(s) {lines}")

    match issues:
        case []:
            return {"valid": True, "status": "ok", "errors": []}
        case errors:
            return {"valid": False, "status": "error", "errors": errors}

