"""Shared fixtures for organization pipeline tests."""

from pathlib import Path

import pytest

from orgpipeline.org.models import Employee

HEADER = "Id,firstName,lastName,salary,managerId"

SAMPLE_ROWS = [
    "123,Joe,Doe,60000,",
    "124,Martin,Chekov,30000,123",
    "125,Bob,Ronstad,47000,123",
    "300,Alice,Hasacat,50000,124",
    "305,Brett,Hardleaf,34000,300",
]


def build_deep_org_rows() -> list[str]:
    """21 employees, six levels below the CEO at the deepest point."""
    rows = [
        "1,CEO,Boss,200000,",
        "2,VP,Sales,120000,1",
        "3,VP,Engineering,120000,1",
        "4,Director,SalesOps,72000,2",
        "5,Director,DevOps,72000,3",
        "6,SeniorMgr,TeamA,43200,4",
        "7,SeniorMgr,TeamB,43200,5",
        "8,Manager,SubTeamA,25920,6",
        "9,Manager,SubTeamB,25920,7",
        "10,TeamLead,LeadA1,15552,8",
        "11,TeamLead,LeadA2,15552,8",
        "12,TeamLead,LeadB1,15552,9",
        "13,TeamLead,LeadB2,15552,9",
    ]
    emp_id = 14
    for lead in range(10, 14):
        for _ in range(2):
            rows.append(f"{emp_id},Employee,Emp{emp_id},9331,{lead}")
            emp_id += 1
    return rows


def rows_to_employees(rows: list[str]) -> list[Employee]:
    employees = []
    for row in rows:
        emp_id, first, last, salary, manager = row.split(",")
        employees.append(Employee(emp_id, first, last, float(salary), manager or None))
    return employees


@pytest.fixture
def write_csv(tmp_path):
    """Write an employee export and return its path."""

    def _write(rows: list[str], header: str = HEADER, name: str = "employees.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n")
        return path

    return _write


@pytest.fixture
def sample_employees() -> list[Employee]:
    return rows_to_employees(SAMPLE_ROWS)


@pytest.fixture
def sample_csv(write_csv) -> Path:
    return write_csv(SAMPLE_ROWS)


@pytest.fixture
def deep_org_employees() -> list[Employee]:
    return rows_to_employees(build_deep_org_rows())


@pytest.fixture
def deep_org_csv(write_csv) -> Path:
    return write_csv(build_deep_org_rows())


@pytest.fixture
def healthy_employees() -> list[Employee]:
    return [
        Employee("1", "CEO", "Boss", 100000),
        Employee("2", "Manager", "One", 72000, "1"),
        Employee("3", "Employee", "A", 48000, "2"),
        Employee("4", "Employee", "B", 48000, "2"),
    ]
