import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends

from campus_erp import tables
from campus_erp.core import composer, queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.feedback.schemas import FeedbackCreate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/feedback",
    tags=["feedback"],
    responses={404: {"description": "Not found"}},
)


@router.get("/faculty/{course_id}/{semester}")
def get_feedback_roster(course_id: str, semester: int, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """
    Faculty a student can give feedback on for one course semester,
    one entry per subject that has an assigned faculty.
    """
    logger.info(f"[FEEDBACK] Faculty list for {course_id} {semester}")
    return composer.compose_faculty_feedback_roster(store, course_id, semester)


@router.get("/{student_id}")
def get_student_feedback(student_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.query_by_partition(store, tables.FEEDBACK, student_id)


@router.post("")
def submit_feedback(feedback: FeedbackCreate, store: DocumentStore = Depends(get_store)):
    store.put(tables.FEEDBACK, feedback.to_document())
    logger.info(f"[FEEDBACK SUBMIT] {feedback.StudentID} on {feedback.FacultyID}/{feedback.SubjectCode}")
    return {'success': True}
