from datetime import datetime
from decimal import Decimal
from io import BytesIO

from openpyxl import load_workbook

from app.services.export_service import to_pdf, to_xlsx
from app.services.report_service import ReportTable, build_report_table


def _table():
    return ReportTable(
        title="Task Completion Report",
        columns=["Task", "Status", "Completed At"],
        rows=[["Field survey", "completed", "2024-03-10"], ["Data cleaning", "pending", None]],
        generated_at=datetime(2024, 3, 31, 12, 0),
    )


def test_xlsx_has_bold_header_and_rows():
    ws = load_workbook(BytesIO(to_xlsx(_table()))).active

    assert [c.value for c in ws[1]] == ["Task", "Status", "Completed At"]
    assert all(c.font.bold for c in ws[1])
    assert [c.value for c in ws[2]] == ["Field survey", "completed", "2024-03-10"]
    assert ws.max_row == 3


def test_pdf_is_a_pdf_document():
    content = to_pdf(_table())
    assert content.startswith(b"%PDF")
    assert content.rstrip().endswith(b"%%EOF")


def test_empty_table_still_renders():
    table = ReportTable(title="KPI Analysis Report", columns=["KPI", "Progress (%)"])
    assert to_pdf(table).startswith(b"%PDF")
    assert load_workbook(BytesIO(to_xlsx(table))).active.max_row == 1


def test_employee_performance_rows(store):
    store.tasks.create({"title": "Closeout", "status": "completed", "assignee_id": "emp-1"})
    report = store.reports.create({"name": "Employee Performance Report", "type": "employee-performance"})

    table = build_report_table(store, report)

    jane = table.rows[0]
    assert jane[0] == "Jane Smith"
    assert jane[4:] == [2, 1, 50.0]


def test_project_progress_manager_names(store):
    store.projects.create({"name": "Orphan", "client": "X", "start_date": datetime(2024, 1, 1), "manager_id": "gone"})
    store.projects.create({"name": "Unstaffed", "client": "X", "start_date": datetime(2024, 1, 1)})
    report = store.reports.create({"name": "Project Progress Report", "type": "project-progress"})

    managers = [row[-1] for row in build_report_table(store, report).rows]

    assert managers == ["Jane Smith", "Mark Johnson", "Unknown", "Unassigned"]


def test_financial_summary_totals(empty_store):
    for txn_type, category, amount in [("income", "Grants", "100"), ("income", "Grants", "50"), ("expense", "Fuel", "30")]:
        empty_store.transactions.create({
            "type": txn_type, "category": category, "amount": Decimal(amount), "description": "x",
            "date": datetime(2024, 1, 1),
        })
    report = empty_store.reports.create({"name": "Financial Summary Report", "type": "financial-summary"})

    rows = build_report_table(empty_store, report).rows

    assert rows == [
        ["income", "Grants", 150.0],
        ["expense", "Fuel", 30.0],
        ["total", "Income", 150.0],
        ["total", "Expenses", 30.0],
        ["total", "Net Balance", 120.0],
    ]
