from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import Numeric

from app.core.errors import ConflictError
from app.models.base import Base
from app.services.seed import seed_store


def _employee(**overrides):
    fields = {
        "employee_id": "GSI200",
        "first_name": "Peter",
        "last_name": "Okello",
        "email": "peter.okello@governancesystemsint.com",
        "position": "Field Coordinator",
        "department": "Operations",
        "hire_date": datetime(2023, 6, 1),
        "salary": Decimal("40000.00"),
    }
    fields.update(overrides)
    return fields


def test_create_then_get_returns_input_plus_generated_fields(empty_store):
    created = empty_store.employees.create(_employee())
    fetched = empty_store.employees.get(created.id)

    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.employee_id == "GSI200"
    assert fetched.email == "peter.okello@governancesystemsint.com"
    assert fetched.salary == Decimal("40000.00")
    assert fetched.status == "active"
    assert fetched.created_at == fetched.updated_at


MINIMAL_RECORDS = {
    "users": {"email": "clerk@governancesystemsint.com", "hashed_password": "salt$hash", "first_name": "A", "last_name": "B"},
    "employees": _employee(),
    "projects": {"name": "Northern Uganda Baseline", "client": "UNICEF", "start_date": datetime(2024, 1, 1)},
    "tasks": {"title": "Draft inception report"},
    "kpis": {"name": "Reports filed", "category": "Compliance", "period": "Q1"},
    "transactions": {
        "type": "income", "amount": Decimal("10"), "description": "Fee", "category": "Fees", "date": datetime(2024, 1, 1),
    },
    "payroll": {"employee_id": "emp-1", "period": "2024-01", "base_salary": Decimal("900")},
    "proposals": {"title": "Water governance", "client": "AfDB"},
    "evaluations": {"project_id": "proj-1", "evaluation_type": "midterm", "evaluation_date": datetime(2024, 6, 1)},
    "assets": {"name": "Laptop", "category": "IT", "serial_number": "SN-9"},
}


@pytest.mark.parametrize("collection", sorted(MINIMAL_RECORDS))
def test_empty_update_advances_updated_at_only(empty_store, collection):
    target = getattr(empty_store, collection)
    created = target.create(MINIMAL_RECORDS[collection])

    updated = target.update(created.id, {})

    assert updated.updated_at > created.updated_at
    columns = [c for c in target.model.__table__.columns.keys() if c != "updated_at"]
    assert {c: getattr(updated, c) for c in columns} == {c: getattr(created, c) for c in columns}


def test_update_ignores_protected_fields(empty_store):
    created = empty_store.kpis.create({"name": "Reports filed", "category": "Compliance", "period": "Q1"})

    updated = empty_store.kpis.update(created.id, {
        "id": "other-id",
        "created_at": datetime(2000, 1, 1),
        "name": "Reports submitted",
    })

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.name == "Reports submitted"
    assert empty_store.kpis.get("other-id") is None


def test_update_missing_record_returns_none(empty_store):
    assert empty_store.tasks.update("missing", {"title": "x"}) is None


def test_delete_then_get_is_not_found(empty_store):
    created = empty_store.assets.create({"name": "Laptop", "category": "IT"})

    assert empty_store.assets.delete(created.id) is True
    assert empty_store.assets.get(created.id) is None
    assert empty_store.assets.delete(created.id) is False


def test_list_keeps_insertion_order(empty_store):
    ids = [
        empty_store.tasks.create({"title": f"Task {n}"}).id
        for n in range(5)
    ]
    assert [t.id for t in empty_store.tasks.list()] == ids


def test_duplicate_unique_fields_conflict(empty_store):
    empty_store.employees.create(_employee())

    with pytest.raises(ConflictError):
        empty_store.employees.create(_employee(employee_id="GSI201"))
    with pytest.raises(ConflictError):
        empty_store.employees.create(_employee(email="someone.else@governancesystemsint.com"))
    assert empty_store.employees.count() == 1


def test_update_to_taken_serial_number_conflicts(empty_store):
    empty_store.assets.create({"name": "Projector", "category": "AV", "serial_number": "SN-1"})
    other = empty_store.assets.create({"name": "Printer", "category": "IT", "serial_number": "SN-2"})

    with pytest.raises(ConflictError):
        empty_store.assets.update(other.id, {"serial_number": "SN-1"})
    assert empty_store.assets.get(other.id).serial_number == "SN-2"


def test_payroll_net_pay_computed_on_create_but_not_on_update(empty_store):
    record = empty_store.payroll.create({
        "employee_id": "emp-1",
        "period": "2024-03",
        "base_salary": Decimal("1000"),
        "allowances": Decimal("200"),
        "deductions": Decimal("50"),
        "net_pay": Decimal("1"),
    })
    assert record.net_pay == Decimal("1150")

    updated = empty_store.payroll.update(record.id, {"base_salary": Decimal("2000")})
    assert updated.base_salary == Decimal("2000")
    assert updated.net_pay == Decimal("1150")


def test_payroll_approved_at_is_stamped_once(empty_store):
    record = empty_store.payroll.create({"employee_id": "emp-1", "period": "2024-04", "base_salary": Decimal("500")})
    assert record.approved_at is None

    first = empty_store.payroll.update(record.id, {"approved_by": "emp-1"})
    assert first.approved_at is not None

    second = empty_store.payroll.update(record.id, {"approved_by": "emp-2", "approved_at": datetime(2001, 1, 1)})
    assert second.approved_by == "emp-2"
    assert second.approved_at == first.approved_at


def test_payroll_created_with_approver_is_approved_immediately(empty_store):
    record = empty_store.payroll.create({
        "employee_id": "emp-1", "period": "2024-05", "base_salary": Decimal("500"), "approved_by": "emp-2",
    })
    assert record.approved_at == record.created_at


def test_reports_have_no_update(empty_store):
    report = empty_store.reports.create({"name": "KPI Analysis Report", "type": "kpi-analysis"})
    assert report.generated_at is not None
    assert not hasattr(empty_store.reports, "update")


def test_filtered_lists(empty_store):
    a = empty_store.tasks.create({"title": "A", "project_id": "p1", "assignee_id": "e1"})
    empty_store.tasks.create({"title": "B", "project_id": "p2", "assignee_id": "e1"})
    empty_store.evaluations.create({
        "project_id": "p1", "evaluation_type": "baseline", "evaluation_date": datetime(2024, 1, 1),
    })

    assert [t.id for t in empty_store.tasks.list_by_project("p1")] == [a.id]
    assert len(empty_store.tasks.list_by_assignee("e1")) == 2
    assert len(empty_store.evaluations.list_by_project("p1")) == 1
    assert empty_store.transactions.list_by_project("p1") == []


def test_seed_data(store):
    admin = store.users.get_by_email("admin@governancesystemsint.com")
    assert admin.id == "admin-1"
    assert admin.role == "administrator"
    assert admin.permissions == ["read", "write", "admin"]

    assert [e.id for e in store.employees.list()] == ["emp-1", "emp-2"]
    assert store.employees.get("emp-2").manager_id == "emp-1"
    assert [p.id for p in store.projects.list()] == ["proj-1", "proj-2"]
    assert store.tasks.get("task-2").completed_at == datetime(2024, 3, 10)


def test_seeding_twice_adds_nothing(store):
    seed_store(store)
    assert store.users.count() == 1
    assert store.employees.count() == 2


def test_money_columns_hold_every_amount_the_schemas_accept():
    money = [
        (table.name, column.name, column.type)
        for table in Base.metadata.sorted_tables
        for column in table.columns
        if isinstance(column.type, Numeric)
    ]
    assert money
    for table, column, kind in money:
        assert (kind.precision, kind.scale) == (14, 2), f"{table}.{column}"
