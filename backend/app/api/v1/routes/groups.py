from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile
from pydantic import BaseModel, Field

from app.services.export_service import XLSX_MEDIA_TYPE, groups_workbook
from app.services.grouping_service import (
    group_demo,
    group_from_payload,
    group_from_upload,
    quota_summary,
    run_grouping,
)
from app.services.roster_service import RosterFilter, RosterUnavailable, players_from_payload

router = APIRouter()


class GroupingRequest(BaseModel):
    players: List[Dict[str, Any]]
    group_size: Optional[int] = Field(None, ge=5, le=11)
    filters: Optional[RosterFilter] = None


@router.post("")
def create_groups(req: GroupingRequest) -> Dict[str, Any]:
    """Split the posted roster into balanced groups."""
    try:
        return group_from_payload(req.players, group_size=req.group_size, filters=req.filters)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/upload")
async def create_groups_from_upload(
    file: UploadFile = File(..., description="CSV or Excel roster"),
    group_size: Optional[int] = Query(None, ge=5, le=11),
) -> Dict[str, Any]:
    content = await file.read()
    try:
        return group_from_upload(content, file.filename or "", group_size=group_size)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/demo")
def create_demo_groups(group_size: Optional[int] = Query(None, ge=5, le=11)) -> Dict[str, Any]:
    try:
        return group_demo(group_size=group_size)
    except RosterUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))


@router.get("/quotas/{group_size}")
def get_quotas(group_size: int) -> Dict[str, Any]:
    try:
        return quota_summary(group_size)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/export")
def export_groups(req: GroupingRequest) -> Response:
    """Build groups and return them as a printable workbook, one sheet per group."""
    try:
        result = run_grouping(players_from_payload(req.players), group_size=req.group_size, filters=req.filters)
        content = groups_workbook(result)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    filename = f"Team_Groups_{date.today().isoformat()}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
