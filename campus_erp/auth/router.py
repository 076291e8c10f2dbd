import logging
from fastapi import APIRouter, Depends

from campus_erp import tables
from campus_erp.auth.schemas import LoginRequest, LoginResponse
from campus_erp.core import queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["authentication"]
)

@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, store: DocumentStore = Depends(get_store)):
    """
    Log a student in by StudentID.
    No credential check is made; the id only has to exist.
    """
    student = queries.first_in_partition(store, tables.STUDENT, request.userId)
    if student is None:
        logger.warning(f"Login attempt for unknown StudentID {request.userId}")
        raise Unauthorized("User not found")

    return {
        'success': True,
        'user': {'type': 'student', 'id': student['StudentID']},
        'studentData': student,
    }
