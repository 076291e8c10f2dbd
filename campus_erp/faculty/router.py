import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import require_params
from campus_erp.faculty import service
from campus_erp.faculty.schemas import FacultyProfileUpdate, FacultyProfileUpdateResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["faculty"])


@router.get("/faculty/{faculty_id}")
def get_faculty(faculty_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return service.get_faculty(store, faculty_id)


@router.put("/api/faculty/{faculty_id}", response_model=FacultyProfileUpdateResponse)
def update_faculty_profile(
    faculty_id: str,
    update: FacultyProfileUpdate,
    store: DocumentStore = Depends(get_store),
):
    updated = service.update_profile(store, faculty_id, update)
    return {
        'success': True,
        'message': "Profile updated successfully",
        'data': updated,
    }


@router.get("/api/faculty-assignments")
def get_faculty_assignment(
    courseId: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    facultyId: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """The faculty's assignment for one course semester section, or {} when there is none."""
    require_params(courseId=courseId, semester=semester, section=section, facultyId=facultyId)
    items = queries.scan_with_filter(
        store,
        tables.FACULTY_ASSIGNMENTS,
        CourseSemester=tables.composite_key(courseId, semester),
        Section=section,
        FacultyID=facultyId,
    )
    return items[0] if items else {}


@router.get("/api/faculty/feedback/{faculty_id}")
def get_feedback_for_faculty(faculty_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.scan_with_filter(store, tables.FEEDBACK, FacultyID=faculty_id)
