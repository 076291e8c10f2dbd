import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.core import composer, queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import require_params
from campus_erp.exams.schemas import AdmitCardDownloaded

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/exams",
    tags=["exams"]
)


@router.get("/upcoming")
def get_upcoming_exams(
    courseId: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Exam schedule of one course semester, in exam date order."""
    require_params(courseId=courseId, semester=semester)
    return queries.query_by_partition_and_sort_prefix(store, tables.EXAM_SCHEDULE, courseId, semester)


@router.get("/admit-card/{student_id}")
def get_admit_cards(student_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.query_by_partition(store, tables.ADMIT_CARDS, student_id)


@router.post("/admit-card/downloaded")
def mark_admit_card_downloaded(request: AdmitCardDownloaded, store: DocumentStore = Depends(get_store)):
    store.update(
        tables.ADMIT_CARDS,
        tables.ADMIT_CARDS.key(request.studentId, request.semester),
        {'Downloaded': True},
    )
    logger.info(f"[ADMIT-DOWNLOADED] {request.studentId} semester {request.semester}")
    return {'success': True}


@router.get("/results/{student_id}")
def get_results(
    student_id: str,
    semester: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Subject results and the semester summary, fetched independently."""
    require_params(semester=semester)
    view = composer.compose_results_view(store, student_id, semester)
    logger.info(
        f"[RESULTS] {student_id} semester {semester}: {len(view['subjects'])} subjects, "
        f"summary {'found' if view['summary'] else 'missing'}"
    )
    return view
