"""Organization structure domain.

Loads employee exports, proves the reporting hierarchy is a single tree and
flags managers paid outside their salary band and employees with overly long
reporting lines.
"""

from pathlib import Path

from orgpipeline.config import AnalysisPolicy
from orgpipeline.errors import OrgDataError
from orgpipeline.org.analyzer import analyze, validate_and_analyze
from orgpipeline.org.hierarchy import validate_and_index
from orgpipeline.org.ingest import load_employees
from orgpipeline.org.models import Employee, Report
from orgpipeline.org.report import render_report, save_report


def validate(path: str | Path) -> dict[str, str | int]:
    """Check that an export loads and forms a valid hierarchy, without analyzing it."""
    try:
        employees = load_employees(path)
        validate_and_index(employees)
        return {"status": "ok", "rows_available": len(employees)}
    except OrgDataError as exc:
        return {"status": "error", "message": exc.message}


def run(path: str | Path, policy: AnalysisPolicy | None = None) -> Report:
    """Execute the full organization pipeline for one export."""
    employees = load_employees(path)
    return validate_and_analyze(employees, policy)
