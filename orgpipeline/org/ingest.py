"""Ingest employee exports (CSV) into validated Employee records."""

import csv
import io
import logging
from pathlib import Path

import numpy as np
import pandas as pd

from orgpipeline.errors import InputShapeError, RecordFormatError
from orgpipeline.org.models import Employee, employee_schema
from orgpipeline.utils.validators import validate_dataframe, validate_no_nulls

logger = logging.getLogger(__name__)

type FilePath = str | Path

# Export header -> canonical column name
COLUMN_MAPPING = {
    "id": "employee_id",
    "employeeid": "employee_id",
    "firstname": "first_name",
    "lastname": "last_name",
    "salary": "salary",
    "managerid": "manager_id",
}
EXPECTED_COLUMNS = len(set(COLUMN_MAPPING.values()))
REQUIRED_COLUMNS = ["employee_id", "first_name", "last_name", "salary"]

# Header is line 1, so the first data row is line 2
_FIRST_DATA_LINE = 2


def _normalize_header(name: str) -> str:
    return name.strip().lower().replace("_", "").replace(" ", "")


def _decode_export(path: Path) -> str:
    """Decode an export, falling back to cp1252 and then latin-1."""
    raw = path.read_bytes()
    for encoding in ("utf-8", "cp1252"):
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte
    return raw.decode("latin-1")


def _check_field_counts(text: str) -> None:
    """Every non-blank row, header included, must carry exactly five fields."""
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if not header:
        raise RecordFormatError("No employee data found in file")
    if len(header) != EXPECTED_COLUMNS:
        raise RecordFormatError(
            f"Expected {EXPECTED_COLUMNS} columns, found {len(header)}"
        )

    bad_lines: list[int] = []
    first_error = None
    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        if len(row) != EXPECTED_COLUMNS:
            bad_lines.append(reader.line_num)
            if first_error is None:
                first_error = (
                    f"Expected {EXPECTED_COLUMNS} columns, found {len(row)} "
                    f"on line {reader.line_num}: {','.join(row)}"
                )
    if first_error:
        raise RecordFormatError(first_error, details={"bad_lines": bad_lines})


def _read_export_file(path: Path) -> pd.DataFrame:
    """Read a single export with every cell as text. Only empty cells are missing."""
    text = _decode_export(path)
    _check_field_counts(text)
    return pd.read_csv(
        io.StringIO(text),
        dtype=str,
        engine="python",
        index_col=False,
        skip_blank_lines=False,
        keep_default_na=False,
        na_values=[""],
    )


def read_employee_export(path: FilePath) -> pd.DataFrame:
    """Load an employee export into a DataFrame indexed by file line number.

    Columns are renamed to ``employee_id, first_name, last_name, salary,
    manager_id``; cells are stripped and blank cells become NaN. Blank lines
    are dropped.
    """
    path = Path(path)
    if not path.is_file():
        raise InputShapeError(f"File does not exist: {path}")

    logger.info("Reading employee export: %s", path.name)
    df = _read_export_file(path)
    df = df.rename(columns={c: COLUMN_MAPPING.get(_normalize_header(c), c) for c in df.columns})
    unknown = sorted(set(df.columns) - set(COLUMN_MAPPING.values()))
    if unknown:
        raise RecordFormatError(f"Unexpected columns in header: {unknown}")

    df.index = pd.RangeIndex(_FIRST_DATA_LINE, _FIRST_DATA_LINE + len(df))
    for col in df.columns:
        df[col] = df[col].str.strip().replace("", np.nan)
    df = df.dropna(how="all")

    if df.empty:
        raise RecordFormatError("No employee data found in file")
    return df


def validate_employee_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Check required fields and the pandera schema, returning the coerced frame."""
    errors: list[str] = []
    for outcome in (
        validate_no_nulls(df, REQUIRED_COLUMNS),
        validate_dataframe(df, employee_schema),
    ):
        match outcome:
            case {"valid": False, "errors": found}:
                errors.extend(found)
            case _:
                pass

    if errors:
        unique = list(dict.fromkeys(errors))
        raise RecordFormatError(
            f"Invalid data in employee export: {'; '.join(unique[:10])}",
            details={"errors": unique},
        )
    return employee_schema.validate(df)


def to_employee_records(df: pd.DataFrame) -> list[Employee]:
    """Convert validated rows into Employee records, keeping file order."""
    employees = []
    for line, row in df.iterrows():
        try:
            employees.append(
                Employee(
                    id=row["employee_id"],
                    first_name=row["first_name"],
                    last_name=row["last_name"],
                    salary=float(row["salary"]),
                    manager_id=None if pd.isna(row["manager_id"]) else row["manager_id"],
                )
            )
        except ValueError as exc:
            raise RecordFormatError(f"Invalid data at line {line}: {exc}") from exc
    return employees


def load_employees(path: FilePath) -> list[Employee]:
    """Read, validate and convert an employee export."""
    df = validate_employee_frame(read_employee_export(path))
    employees = to_employee_records(df)
    logger.info("Loaded %d employee records from %s", len(employees), Path(path).name)
    return employees
