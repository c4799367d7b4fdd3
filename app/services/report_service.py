from dataclasses import dataclass, field
from decimal import Decimal
from app.schemas.schemas import REPORT_TYPES
from app.services.analytics import finance_totals, kpi_progress


@dataclass
class ReportTable:
    title: str
    columns: list[str]
    rows: list[list] = field(default_factory=list)
    generated_at: object = None


def report_display_name(report_type: str) -> str:
    return REPORT_TYPES[report_type]


def _fmt_date(value):
    return value.strftime("%Y-%m-%d") if value else ""


def _money(value):
    return float(value) if value is not None else None


def _person(employees: dict, employee_id: str | None) -> str:
    if not employee_id:
        return "Unassigned"
    employee = employees.get(employee_id)
    return employee.full_name if employee else "Unknown"


def _employee_performance(store):
    rows = []
    for emp in store.employees.list():
        assigned = store.tasks.list_by_assignee(emp.id)
        completed = sum(1 for t in assigned if t.status == "completed")
        rate = round(completed / len(assigned) * 100, 1) if assigned else 0.0
        rows.append([emp.full_name, emp.position, emp.department, emp.status, len(assigned), completed, rate])
    return ["Employee", "Position", "Department", "Status", "Tasks Assigned", "Tasks Completed", "Completion Rate (%)"], rows


def _financial_summary(store):
    grouped: dict[tuple[str, str], Decimal] = {}
    for txn in store.transactions.list():
        key = (txn.type, txn.category)
        grouped[key] = grouped.get(key, Decimal("0")) + Decimal(txn.amount)
    rows = [[txn_type, category, float(total)] for (txn_type, category), total in grouped.items()]
    totals = finance_totals(store)
    rows.append(["total", "Income", totals["total_income"]])
    rows.append(["total", "Expenses", totals["total_expenses"]])
    rows.append(["total", "Net Balance", totals["net_balance"]])
    return ["Type", "Category", "Amount"], rows


def _project_progress(store):
    employees = {e.id: e for e in store.employees.list()}
    rows = []
    for project in store.projects.list():
        project_tasks = store.tasks.list_by_project(project.id)
        completed = sum(1 for t in project_tasks if t.status == "completed")
        rows.append([
            project.name, project.client, project.status, project.progress or 0,
            _money(project.budget), len(project_tasks), completed,
            _person(employees, project.manager_id),
        ])
    return ["Project", "Client", "Status", "Progress (%)", "Budget", "Tasks", "Completed Tasks", "Manager"], rows


def _task_completion(store):
    employees = {e.id: e for e in store.employees.list()}
    projects = {p.id: p for p in store.projects.list()}
    rows = []
    for task in store.tasks.list():
        if task.project_id:
            project = projects.get(task.project_id)
            project_name = project.name if project else "Unknown"
        else:
            project_name = "None"
        rows.append([
            task.title, task.status, task.priority, _person(employees, task.assignee_id),
            project_name, _fmt_date(task.due_date), _fmt_date(task.completed_at),
        ])
    return ["Task", "Status", "Priority", "Assignee", "Project", "Due Date", "Completed At"], rows


def _kpi_analysis(store):
    rows = []
    for kpi in store.kpis.list():
        rows.append([
            kpi.name, kpi.category, _money(kpi.current_value), _money(kpi.target_value),
            kpi.unit or "", kpi.period, round(kpi_progress(kpi), 1),
        ])
    return ["KPI", "Category", "Current", "Target", "Unit", "Period", "Progress (%)"], rows


BUILDERS = {
    "employee-performance": _employee_performance,
    "financial-summary": _financial_summary,
    "project-progress": _project_progress,
    "task-completion": _task_completion,
    "kpi-analysis": _kpi_analysis,
}


def build_report_table(store, report) -> ReportTable:
    builder = BUILDERS.get(report.type)
    if builder is None:
        raise ValueError(f"Unsupported report type: {report.type}")
    columns, rows = builder(store)
    return ReportTable(title=report.name, columns=columns, rows=rows, generated_at=report.generated_at)
