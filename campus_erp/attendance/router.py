import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.attendance.schemas import AttendanceBatch, OverallAttendanceResponse
from campus_erp.core import queries
from campus_erp.core.metrics import overall_attendance
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import require_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attendance"])


@router.get("/api/attendance")
def get_attendance(studentId: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    require_params(studentId=studentId)
    return queries.query_by_partition(store, tables.ATTENDANCE, studentId)


@router.get("/api/attendance-overall/{student_id}", response_model=OverallAttendanceResponse)
def get_overall_attendance(student_id: str, store: DocumentStore = Depends(get_store)):
    """
    Percentage of attended classes across all subjects.
    "--" when the student has no attendance rows yet.
    """
    rows = queries.query_by_partition(store, tables.ATTENDANCE, student_id)
    return {'overall': overall_attendance(rows)}


@router.post("/api/attendance")
def save_attendance(batch: AttendanceBatch, store: DocumentStore = Depends(get_store)):
    store.batch_put(tables.ATTENDANCE, [record.to_document() for record in batch.records])
    logger.info(f"Saved {len(batch.records)} attendance records")
    return {'success': True}
