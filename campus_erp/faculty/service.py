import logging
from typing import Any, Dict

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.database import DocumentStore
from campus_erp.errors import MissingParameter, NotFound
from campus_erp.faculty.schemas import FacultyProfileUpdate

logger = logging.getLogger(__name__)


def get_faculty(store: DocumentStore, faculty_id: str) -> Dict[str, Any]:
    faculty = queries.first_in_partition(store, tables.FACULTY, faculty_id)
    if faculty is None:
        raise NotFound("Faculty not found")
    return faculty


def update_profile(store: DocumentStore, faculty_id: str, update: FacultyProfileUpdate) -> Dict[str, Any]:
    """
    Apply the set fields of `update` to the faculty document and return it.
    The Department sort key is looked up from the current document.
    """
    current = get_faculty(store, faculty_id)
    fields = update.field_updates()
    if not fields:
        raise MissingParameter("No valid fields to update")

    key = tables.FACULTY.key(faculty_id, current['Department'])
    updated = store.update(tables.FACULTY, key, fields)
    logger.info(f"Faculty {faculty_id} profile updated: {sorted(fields)}")
    return updated
