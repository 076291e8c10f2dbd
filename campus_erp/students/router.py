import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.config.settings import settings
from campus_erp.core import queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.students import service
from campus_erp.students.schemas import StudentRecord, StudentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students"])


@router.get("/api/students")
def get_roster(
    courseId: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Class roster sorted by roll number; filters are optional, "all" disables one."""
    return service.list_roster(store, course_id=courseId, branch=branch, semester=semester, section=section)


@router.post("/students")
def create_student(student: StudentRecord, store: DocumentStore = Depends(get_store)):
    """Create a student and allocate a room in the default hostel."""
    logger.info(f"[ADD-STUDENT] Payload for {student.StudentID}")
    return service.create_student(store, student, hostel_id=settings.DEFAULT_HOSTEL_ID)


@router.get("/students")
def list_students(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    students = queries.scan_with_filter(store, tables.STUDENT)
    logger.info(f"[GET-STUDENTS] Items retrieved: {len(students)}")
    return students


@router.put("/students/{student_id}")
def replace_student(student_id: str, student: StudentUpdate, store: DocumentStore = Depends(get_store)):
    """Replace the whole Student document; the path id always wins."""
    data = {**student.model_dump(mode="json", exclude_none=True), 'StudentID': student_id}
    store.put(tables.STUDENT, data)
    logger.info(f"[UPDATE-STUDENT] Successful update for {student_id}")
    return data


@router.delete("/students/{student_id}")
def delete_student(student_id: str, store: DocumentStore = Depends(get_store)):
    # Attendance, fee and placement documents of the student are left in place
    store.delete(tables.STUDENT, tables.STUDENT.key(student_id))
    logger.info(f"[DELETE-STUDENT] Deleted StudentID: {student_id}")
    return {'success': True}
