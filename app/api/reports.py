import io
import logging
from pathlib import Path
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, StreamingResponse
from fastapi.templating import Jinja2Templates
from app.api.deps import get_store, validate_payload, get_or_404
from app.models.models import ReportStatus, gen_uuid
from app.schemas.schemas import ReportCreate, ReportResponse
from app.services.export_service import ENCODERS
from app.services.report_service import build_report_table, report_display_name

router = APIRouter(prefix="/api/reports", tags=["reports"])
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("", response_model=list[ReportResponse])
def list_reports(store=Depends(get_store)):
    return store.reports.list()


@router.post("", response_model=ReportResponse, status_code=201)
def generate_report(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(ReportCreate, data, "report")
    report_id = gen_uuid()
    return store.reports.create({
        "name": report_display_name(payload.type),
        "type": payload.type,
        "description": payload.description,
        "created_by": payload.created_by,
        "status": ReportStatus.COMPLETED.value,
        "file_path": f"/api/reports/{report_id}/download",
    }, record_id=report_id)


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(report_id: str, store=Depends(get_store)):
    return get_or_404(store.reports, report_id)


@router.get("/{report_id}/view", response_class=HTMLResponse)
def view_report(report_id: str, request: Request, store=Depends(get_store)):
    report = get_or_404(store.reports, report_id)
    table = build_report_table(store, report)
    return templates.TemplateResponse(request, "report.html", {"report": report, "table": table})


@router.get("/{report_id}/download")
def download_report(report_id: str, format: str = Query("excel"), store=Depends(get_store)):
    report = get_or_404(store.reports, report_id)
    if format not in ENCODERS:
        raise HTTPException(status_code=400, detail=f"Unsupported report format: {format}")

    encode, media_type, extension = ENCODERS[format]
    content = encode(build_report_table(store, report))
    logger.info("Rendered report %s as %s (%d bytes)", report_id, format, len(content))
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename=report-{report_id}.{extension}"}
    )
