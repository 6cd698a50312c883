from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, File, HTTPException, Query, Response, UploadFile

from app.services.export_service import XLSX_MEDIA_TYPE, roster_workbook
from app.services.roster_service import (
    RosterFilter,
    RosterUnavailable,
    filter_players,
    load_demo_roster,
    parse_roster,
    players_from_payload,
)

router = APIRouter()


@router.post("/parse")
async def parse_upload(file: UploadFile = File(..., description="CSV or Excel roster")) -> Dict[str, Any]:
    """Normalise an uploaded roster into player records."""
    content = await file.read()
    try:
        players = parse_roster(content, file.filename or "")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"count": len(players), "players": [p.model_dump() for p in players]}


@router.get("/demo")
def demo_roster(size: int = Query(60, ge=1, le=500)) -> Dict[str, Any]:
    try:
        players = load_demo_roster(size=size)
    except RosterUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return {"count": len(players), "players": [p.model_dump() for p in players]}


@router.post("/filter")
def filter_roster(
    rows: List[Dict[str, Any]] = Body(..., embed=True, description="Player rows"),
    filters: Optional[RosterFilter] = Body(None, embed=True),
) -> Dict[str, Any]:
    try:
        players = filter_players(players_from_payload(rows), filters)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"count": len(players), "players": [p.model_dump() for p in players]}


@router.post("/export")
def export_roster(rows: List[Dict[str, Any]] = Body(..., embed=True, description="Player rows")) -> Response:
    try:
        content = roster_workbook(players_from_payload(rows))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="players.xlsx"'},
    )
