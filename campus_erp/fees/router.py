from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.core.metrics import sort_numeric
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import require_params

router = APIRouter(
    prefix="/api/feepaid",
    tags=["fees"]
)


@router.get("")
def get_fees_paid(studentId: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Fee payments of a student in semester order."""
    require_params(studentId=studentId)
    return sort_numeric(queries.query_by_partition(store, tables.FEES_PAID, studentId), 'Sem')
