"""Org hierarchy resolution: prove the manager links form a single tree and index it."""

import logging
from collections import defaultdict
from collections.abc import Sequence

from orgpipeline.errors import InputShapeError, StructuralError
from orgpipeline.org.models import Employee, EmployeeID

logger = logging.getLogger(__name__)

type EmployeeIndex = dict[EmployeeID, Employee]
type SubordinateIndex = dict[EmployeeID, list[Employee]]


def _check_unique_ids(employees: Sequence[Employee]) -> None:
    seen: set[EmployeeID] = set()
    for emp in employees:
        if emp.id in seen:
            raise InputShapeError(
                f"Duplicate employee ID found: {emp.id}",
                details={"employee_id": emp.id},
            )
        seen.add(emp.id)


def _check_single_root(employees: Sequence[Employee]) -> None:
    roots = [emp.id for emp in employees if emp.is_root]
    match roots:
        case []:
            raise StructuralError("No CEO found (employee with no manager)")
        case [_]:
            return
        case _:
            raise StructuralError(
                f"Multiple CEOs found (employees with no manager): {', '.join(roots)}",
                details={"root_ids": roots},
            )


def _check_manager_references(employees: Sequence[Employee], by_id: EmployeeIndex) -> None:
    for emp in employees:
        if not emp.is_root and emp.manager_id not in by_id:
            raise StructuralError(
                f"Employee {emp.id} references non-existent manager: {emp.manager_id}",
                details={"employee_id": emp.id, "manager_id": emp.manager_id},
            )


def _check_no_cycles(employees: Sequence[Employee], by_id: EmployeeIndex) -> None:
    """Walk each employee's manager chain up to the CEO, failing on any revisit."""
    for employee in employees:
        visited: set[EmployeeID] = set()
        current = employee
        while not current.is_root:
            if current.id in visited:
                raise StructuralError(
                    "Circular reference detected in reporting structure "
                    f"involving employee: {employee.id}",
                    details={"employee_id": employee.id, "chain": sorted(visited)},
                )
            visited.add(current.id)
            current = by_id[current.manager_id]


def _build_subordinate_index(employees: Sequence[Employee]) -> SubordinateIndex:
    """Build a manager_id -> direct reports map, preserving input order."""
    tree: SubordinateIndex = defaultdict(list)
    for emp in employees:
        if not emp.is_root:
            tree[emp.manager_id].append(emp)
    return dict(tree)


def validate_and_index(
    employees: Sequence[Employee] | None,
) -> tuple[EmployeeIndex, SubordinateIndex]:
    """Validate that ``employees`` form one well-formed reporting tree.

    Checks run in a fixed order and the first failure wins:

    1. the list is non-empty
    2. employee ids are unique (first duplicate in input order is reported)
    3. exactly one employee has no manager
    4. every manager id refers to a known employee
    5. no manager chain loops back on itself

    Returns the ``employee_id -> Employee`` and ``manager_id -> direct reports``
    lookups used by the analyzer.
    """
    if not employees:
        raise InputShapeError("Employee list cannot be empty")

    _check_unique_ids(employees)
    _check_single_root(employees)

    by_id: EmployeeIndex = {emp.id: emp for emp in employees}
    _check_manager_references(employees, by_id)
    _check_no_cycles(employees, by_id)

    subordinates = _build_subordinate_index(employees)
    logger.debug(
        "Validated org hierarchy: %d employees, %d managers",
        len(by_id),
        len(subordinates),
    )
    return by_id, subordinates
