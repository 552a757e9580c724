"""Employee records, analysis report types and the pandera export schema."""

from dataclasses import dataclass, field
from enum import StrEnum

import pandera as pa
from pandera import Column, Check, Index

type EmployeeID = str
type SalaryAmount = float | int


employee_schema = pa.DataFrameSchema(
    {
        "employee_id": Column(str, Check.str_length(min_value=1)),
        "first_name": Column(str, Check.str_length(min_value=1)),
        "last_name": Column(str, Check.str_length(min_value=1)),
        "salary": Column(float, Check.greater_than_or_equal_to(0)),
        "manager_id": Column(str, nullable=True),
    },
    index=Index(int),
    strict=True,
    coerce=True,
)


@dataclass(frozen=True)
class Employee:
    """A single employee. Two records with the same id are the same employee."""

    id: EmployeeID
    first_name: str = field(compare=False)
    last_name: str = field(compare=False)
    salary: SalaryAmount = field(compare=False)
    manager_id: EmployeeID | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Employee ID cannot be empty")
        if not self.first_name or not self.last_name:
            raise ValueError("Employee name cannot be empty")
        if not self.salary >= 0:
            raise ValueError("Salary cannot be negative or NaN")

    @property
    def is_root(self) -> bool:
        """True for the CEO, the only employee without a manager."""
        return not self.manager_id

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class IssueKind(StrEnum):
    UNDERPAID = "underpaid"
    OVERPAID = "overpaid"
    LONG_REPORTING_LINE = "long_reporting_line"


@dataclass(frozen=True)
class SalaryIssue:
    manager: Employee
    average_subordinate_salary: float
    difference: float
    kind: IssueKind


@dataclass(frozen=True)
class ReportingLineIssue:
    employee: Employee
    reporting_levels: int
    excess_levels: int
    kind: IssueKind = IssueKind.LONG_REPORTING_LINE


@dataclass(frozen=True)
class Report:
    """Issues found by one analysis run, each sequence in input record order."""

    underpaid_managers: tuple[SalaryIssue, ...] = ()
    overpaid_managers: tuple[SalaryIssue, ...] = ()
    long_reporting_lines: tuple[ReportingLineIssue, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.underpaid_managers or self.overpaid_managers or self.long_reporting_lines)

    @property
    def issue_count(self) -> int:
        return (
            len(self.underpaid_managers)
            + len(self.overpaid_managers)
            + len(self.long_reporting_lines)
        )
