from io import BytesIO

from openpyxl import load_workbook


def _generate(client, report_type="project-progress", **extra):
    return client.post("/api/reports", json={"type": report_type, **extra})


def test_generate_report(client):
    resp = _generate(client, description="Monthly board pack", createdBy="admin-1")
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Project Progress Report"
    assert body["type"] == "project-progress"
    assert body["status"] == "completed"
    assert body["filePath"] == f"/api/reports/{body['id']}/download"
    assert body["generatedAt"]

    assert client.get(f"/api/reports/{body['id']}").json() == body
    assert [r["id"] for r in client.get("/api/reports").json()] == [body["id"]]


def test_unknown_report_type_rejected(client):
    resp = _generate(client, "staff-gossip")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid report data"
    assert resp.json()["errors"][0]["path"] == ["type"]


def test_reports_are_immutable(client):
    report = _generate(client).json()
    assert client.put(f"/api/reports/{report['id']}", json={"name": "x"}).status_code == 405


def test_download_excel(client):
    report = _generate(client).json()

    resp = client.get(f"/api/reports/{report['id']}/download", params={"format": "excel"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert resp.headers["content-disposition"] == f"attachment; filename=report-{report['id']}.xlsx"
    ws = load_workbook(BytesIO(resp.content)).active
    assert ws["A1"].value == "Project"
    assert ws["A1"].font.bold
    projects = [row[0] for row in ws.iter_rows(min_row=2, values_only=True)]
    assert "Water Reservoir Development - Karamoja" in projects


def test_download_defaults_to_excel(client):
    report = _generate(client, "employee-performance").json()
    resp = client.get(f"/api/reports/{report['id']}/download")
    assert resp.headers["content-disposition"].endswith(".xlsx")


def test_download_pdf(client):
    report = _generate(client, "task-completion").json()

    resp = client.get(f"/api/reports/{report['id']}/download", params={"format": "pdf"})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


def test_download_unsupported_format(client):
    report = _generate(client).json()
    resp = client.get(f"/api/reports/{report['id']}/download", params={"format": "docx"})
    assert resp.status_code == 400


def test_view_report(client):
    client.post("/api/kpis", json={
        "name": "Beneficiaries reached", "category": "Outreach",
        "targetValue": 2000, "currentValue": 500, "unit": "people", "period": "2024",
    })
    report = _generate(client, "kpi-analysis").json()

    resp = client.get(f"/api/reports/{report['id']}/view")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "KPI Analysis Report" in resp.text
    assert "Beneficiaries reached" in resp.text
    assert "25.0" in resp.text


def test_missing_report(client):
    assert client.get("/api/reports/nope").json() == {"message": "Report not found"}
    assert client.get("/api/reports/nope/download").status_code == 404
