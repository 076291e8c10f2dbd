import logging
import time
from datetime import date
from typing import Any, Dict, List
from fastapi import APIRouter, Depends

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.core.metrics import sort_by_date_desc
from campus_erp.database import ConditionFailed, DocumentStore, get_store
from campus_erp.errors import Conflict
from campus_erp.grievances.schemas import GrievanceCreate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/grievances",
    tags=["grievances"]
)

INITIAL_STATUS = "Under Review"
ID_ATTEMPTS = 5


def new_grievance_id() -> str:
    # Millisecond timestamp keeps ids unique per student and sortable
    return f"G{time.time_ns() // 1_000_000}"


def next_grievance_id(grievance_id: str) -> str:
    return f"G{int(grievance_id[1:]) + 1}"


@router.get("/{student_id}")
def get_grievances(student_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """
    Grievances of a student, most recently submitted first.
    Grievances from the same day are ordered by id, newest first.
    """
    items = queries.query_by_partition(store, tables.GRIEVANCES, student_id, descending=True)
    return sort_by_date_desc(items, 'SubmittedAt')


@router.post("", status_code=201)
def create_grievance(grievance: GrievanceCreate, store: DocumentStore = Depends(get_store)):
    today = date.today().isoformat()
    item = {
        **grievance.model_dump(),
        'GrievanceID': new_grievance_id(),
        'Status': INITIAL_STATUS,
        'SubmittedAt': today,
        'LastUpdatedAt': today,
    }
    # An id taken within the same millisecond moves on to the next one
    for _ in range(ID_ATTEMPTS):
        try:
            store.put(tables.GRIEVANCES, item, if_absent=True)
            break
        except ConditionFailed:
            logger.warning(f"[CREATE-GRIEVANCE] {item['GrievanceID']} already taken for {item['StudentID']}")
            item['GrievanceID'] = next_grievance_id(item['GrievanceID'])
    else:
        raise Conflict("Could not allocate a grievance id, please retry")

    logger.info(f"[CREATE-GRIEVANCE] Saved: {item['GrievanceID']}")
    return {'success': True, 'grievance': item}
