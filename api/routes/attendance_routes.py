"""
Attendance records kept by staff about members.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import AttendanceRecord, Member
from api.models.types import utcnow
from api.schemas.attendance_schemas import (
    AttendanceCreate,
    AttendanceRequest,
    AttendanceResponse,
    AttendanceUpdate,
)
from api.schemas.page_schemas import Page
from api.utils.auth import STAFF_ROLES, Actor, get_current_actor, require_roles
from api.utils.common import get_or_404, new_id, paginate

attendance_routes = APIRouter()


@attendance_routes.post("/moderator/attendance-records", response_model=AttendanceResponse)
async def create_attendance(
    req: AttendanceCreate,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    get_or_404(db, Member, req.member_id)
    duplicate = (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.member_id == req.member_id,
            AttendanceRecord.session_label == req.session_label,
            AttendanceRecord.checked_at == req.checked_at,
        )
        .first()
    )
    if duplicate is not None:
        raise HTTPException(status_code=409, detail="Attendance already recorded for this member and session time")
    record = AttendanceRecord(
        id=new_id(),
        member_id=req.member_id,
        recorded_by_role=actor.role,
        recorded_by_id=actor.id,
        session_label=req.session_label,
        checked_at=req.checked_at,
        status=req.status,
        exception_reason=req.exception_reason,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@attendance_routes.patch("/moderator/attendance-records", response_model=Page[AttendanceResponse])
async def index_attendance(
    req: AttendanceRequest,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    query = db.query(AttendanceRecord)
    if req.member_id:
        query = query.filter(AttendanceRecord.member_id == req.member_id)
    if req.session_label:
        query = query.filter(AttendanceRecord.session_label == req.session_label)
    if req.status:
        query = query.filter(AttendanceRecord.status == req.status)
    return paginate(
        query.order_by(AttendanceRecord.checked_at.desc(), AttendanceRecord.id), req, AttendanceResponse
    )


@attendance_routes.get("/attendance-records/{record_id}", response_model=AttendanceResponse)
async def get_attendance(
    record_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Staff may read any record; a member only the records about themselves."""
    record = get_or_404(db, AttendanceRecord, record_id, label="Attendance record")
    if not actor.is_staff and actor.member_id != record.member_id:
        raise HTTPException(status_code=403, detail="Not allowed to view this attendance record")
    return record


@attendance_routes.put("/moderator/attendance-records/{record_id}", response_model=AttendanceResponse)
async def update_attendance(
    record_id: str,
    req: AttendanceUpdate,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    record = get_or_404(db, AttendanceRecord, record_id, label="Attendance record")
    if req.status is not None:
        record.status = req.status
    if req.exception_reason is not None:
        record.exception_reason = req.exception_reason
    record.updated_at = utcnow()
    db.commit()
    db.refresh(record)
    return record


@attendance_routes.delete("/moderator/attendance-records/{record_id}", status_code=204)
async def erase_attendance(
    record_id: str,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
) -> Response:
    record = get_or_404(db, AttendanceRecord, record_id, label="Attendance record")
    db.delete(record)
    db.commit()
    return Response(status_code=204)
