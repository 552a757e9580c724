"""Manager salary band and reporting line analysis over a validated hierarchy."""

import logging
from collections.abc import Sequence

from orgpipeline.config import AnalysisPolicy
from orgpipeline.org.hierarchy import EmployeeIndex, SubordinateIndex, validate_and_index
from orgpipeline.org.models import (
    Employee,
    EmployeeID,
    IssueKind,
    Report,
    ReportingLineIssue,
    SalaryIssue,
)

logger = logging.getLogger(__name__)

type DepthLookup = dict[EmployeeID, int]


def _average_salary(employees: Sequence[Employee]) -> float:
    return sum(emp.salary for emp in employees) / len(employees)


def _classify_salary(
    manager: Employee,
    subordinates: Sequence[Employee],
    policy: AnalysisPolicy,
) -> SalaryIssue | None:
    """Compare a manager's salary to the band around their direct reports' average.

    Salaries exactly on either edge of the band are compliant. The underpaid
    check runs first, so it wins if the band is configured inverted.
    """
    avg = _average_salary(subordinates)
    min_expected = avg * policy.min_manager_salary_ratio
    max_expected = avg * policy.max_manager_salary_ratio

    if manager.salary < min_expected:
        return SalaryIssue(manager, avg, min_expected - manager.salary, IssueKind.UNDERPAID)
    if manager.salary > max_expected:
        return SalaryIssue(manager, avg, manager.salary - max_expected, IssueKind.OVERPAID)
    return None


def compute_reporting_levels(employee_by_id: EmployeeIndex) -> DepthLookup:
    """Count manager hops from every employee up to the CEO (CEO is 0).

    Each chain is walked iteratively and the depths found along the way are
    memoised, so every employee is resolved once.
    """
    depths: DepthLookup = {}
    for employee in employee_by_id.values():
        pending: list[Employee] = []
        current = employee
        while current.id not in depths:
            if current.is_root:
                depths[current.id] = 0
                break
            pending.append(current)
            current = employee_by_id[current.manager_id]

        depth = depths[current.id]
        for node in reversed(pending):
            depth += 1
            depths[node.id] = depth
    return depths


def analyze(
    employees: Sequence[Employee],
    employee_by_id: EmployeeIndex,
    direct_subordinates_by_manager_id: SubordinateIndex,
    policy: AnalysisPolicy | None = None,
) -> Report:
    """Find salary band and reporting line issues in a validated organization.

    The inputs must come from :func:`validate_and_index`; nothing is
    re-validated here. Issues are listed in the order employees appear in
    ``employees``.
    """
    policy = policy or AnalysisPolicy()

    underpaid: list[SalaryIssue] = []
    overpaid: list[SalaryIssue] = []
    for employee in employees:
        subordinates = direct_subordinates_by_manager_id.get(employee.id)
        if not subordinates:
            continue
        match _classify_salary(employee, subordinates, policy):
            case SalaryIssue(kind=IssueKind.UNDERPAID) as issue:
                underpaid.append(issue)
            case SalaryIssue(kind=IssueKind.OVERPAID) as issue:
                overpaid.append(issue)
            case None:
                pass

    depths = compute_reporting_levels(employee_by_id)
    long_lines: list[ReportingLineIssue] = []
    for employee in employees:
        if employee.is_root:
            continue
        levels = depths[employee.id]
        if levels > policy.max_reporting_levels:
            long_lines.append(
                ReportingLineIssue(employee, levels, levels - policy.max_reporting_levels)
            )

    report = Report(tuple(underpaid), tuple(overpaid), tuple(long_lines))
    logger.info(
        "Analyzed %d employees: %d underpaid, %d overpaid, %d long reporting lines",
        len(employees),
        len(report.underpaid_managers),
        len(report.overpaid_managers),
        len(report.long_reporting_lines),
    )
    return report


def validate_and_analyze(
    employees: Sequence[Employee] | None,
    policy: AnalysisPolicy | None = None,
) -> Report:
    """Validate the hierarchy, then analyze it."""
    employee_by_id, subordinates = validate_and_index(employees)
    return analyze(employees, employee_by_id, subordinates, policy)
