import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.core import consistency, queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import NotFound, require_params
from campus_erp.placements.schemas import PlacementApplyRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/placement",
    tags=["placement"]
)


@router.get("/stats/{course_id}")
def get_placement_stats(course_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return queries.get_by_key(store, tables.PLACEMENT_STATS, tables.PLACEMENT_STATS.key(course_id)) or {}


@router.get("/drives")
def get_placement_drives(courseId: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    require_params(courseId=courseId)
    return queries.query_by_partition(store, tables.PLACEMENT_DRIVES, courseId)


@router.get("/profile/{student_id}")
def get_placement_profile(student_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    profile = queries.get_by_key(store, tables.PLACEMENT_PROFILE, tables.PLACEMENT_PROFILE.key(student_id))
    if profile is None:
        raise NotFound("Placement profile not found")
    return profile


@router.post("/apply")
def apply_to_company(request: PlacementApplyRequest, store: DocumentStore = Depends(get_store)):
    """
    Apply to a company's drive. A second application to the same company
    is rejected with 409.
    """
    logger.info(f"[PLACEMENT-APPLY] {request.studentId} -> {request.companyId}")
    consistency.apply_once(store, request.studentId, request.companyId, request.courseId)
    return {'success': True}


@router.get("/applications/{student_id}")
def get_applications(student_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.query_by_partition(store, tables.PLACEMENT_APPLICATIONS, student_id)
