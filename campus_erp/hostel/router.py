import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends

from campus_erp import tables
from campus_erp.core import composer, consistency, queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import NotFound
from campus_erp.hostel.schemas import HostelComplaintCreate, HostelFeePayRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["hostel"]
)


@router.get("/hostel-assigned/{student_id}")
def get_hostel_assignment(student_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    """Student's room assignment merged with the hostel's metadata."""
    return composer.compose_hostel_view(store, student_id)


@router.get("/hostel-fee/{student_id}")
def get_hostel_fee(student_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    record = queries.get_by_key(store, tables.HOSTEL_FEE, tables.HOSTEL_FEE.key(student_id))
    if record is None:
        raise NotFound("No hostel fee record found")
    return record


@router.post("/hostel-fee/pay")
def pay_hostel_fee(request: HostelFeePayRequest, store: DocumentStore = Depends(get_store)):
    consistency.mark_fee_item_paid(store, request.studentId, request.item)
    return {'success': True}


@router.get("/hostel-complaint/{student_id}")
def get_hostel_complaints(student_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.query_by_partition(store, tables.HOSTEL_COMPLAINT, student_id)


@router.post("/hostel-complaint", status_code=201)
def create_hostel_complaint(complaint: HostelComplaintCreate, store: DocumentStore = Depends(get_store)):
    item = complaint.model_dump(exclude_none=True)
    store.put(tables.HOSTEL_COMPLAINT, item)
    logger.info(f"Hostel complaint {complaint.ComplaintID} registered for {complaint.StudentID}")
    return {'success': True, 'complaint': item}
