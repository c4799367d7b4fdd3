"""Derived, read-only views over the entity store.

Nothing here is persisted: every function re-reads the collections it needs.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation

PENDING_TASK_STATUSES = ("pending", "in_progress")
PAYROLL_STATUSES = ("pending", "approved", "paid")


def _as_decimal(value) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def kpi_progress(kpi) -> float:
    """current / target as a percentage clamped to [0, 100]; 0 when undefined."""
    current = _as_decimal(getattr(kpi, "current_value", None))
    target = _as_decimal(getattr(kpi, "target_value", None))
    if current is None or target is None or target == 0:
        return 0.0
    progress = float(current / target * 100)
    return max(0.0, min(100.0, progress))


def dashboard_stats(store, today: datetime | None = None) -> dict:
    today = today or datetime.utcnow()
    active_projects = sum(1 for p in store.projects.list() if p.status == "active")
    total_employees = sum(1 for e in store.employees.list() if e.status == "active")
    pending_tasks = sum(1 for t in store.tasks.list() if t.status in PENDING_TASK_STATUSES)
    monthly_revenue = sum(
        (Decimal(t.amount) for t in store.transactions.list()
         if t.type == "income" and t.date is not None
         and t.date.year == today.year and t.date.month == today.month),
        Decimal("0"),
    )
    return {
        "active_projects": active_projects,
        "total_employees": total_employees,
        "pending_tasks": pending_tasks,
        "monthly_revenue": float(monthly_revenue),
    }


def payroll_totals(store, employee_id: str | None = None) -> dict:
    records = store.payroll.list_by_employee(employee_id) if employee_id else store.payroll.list()
    totals = {status: Decimal("0") for status in PAYROLL_STATUSES}
    grand_total = Decimal("0")
    for record in records:
        net_pay = Decimal(record.net_pay or 0)
        if record.status in totals:
            totals[record.status] += net_pay
        grand_total += net_pay
    result = {status: float(amount) for status, amount in totals.items()}
    result["total"] = float(grand_total)
    result["record_count"] = len(records)
    return result


def finance_totals(store) -> dict:
    income = Decimal("0")
    expenses = Decimal("0")
    for txn in store.transactions.list():
        if txn.type == "income":
            income += Decimal(txn.amount)
        elif txn.type == "expense":
            expenses += Decimal(txn.amount)
    return {
        "total_income": float(income),
        "total_expenses": float(expenses),
        "net_balance": float(income - expenses),
    }


def evaluation_summary(store, project_id: str) -> dict:
    evaluations = store.evaluations.list_by_project(project_id)
    latest = max(evaluations, key=lambda e: e.evaluation_date, default=None)
    return {
        "project_id": project_id,
        "latest_evaluation": latest,
        "score": (latest.score or 0) if latest is not None else 0,
        "evaluation_count": len(evaluations),
    }
