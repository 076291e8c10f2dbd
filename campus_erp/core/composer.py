"""
Views joined across several tables.

The tables carry no referential integrity, so every join states what happens
when the referenced document is missing: the hostel view falls back to
placeholders, the feedback roster skips the subject, the results view returns
the summary as None.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.core.metrics import to_int
from campus_erp.database import DocumentStore
from campus_erp.errors import NotFound

logger = logging.getLogger(__name__)


def _defined(*values: Any) -> Optional[Any]:
    """First value that is neither None nor an empty string."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _or_placeholder(value: Optional[Any], placeholder: str) -> Any:
    return placeholder if value is None else value


def merge_hostel_view(assignment: Dict[str, Any], hostel: Dict[str, Any]) -> Dict[str, Any]:
    """Assignment-level Floor and RoomType win over the hostel defaults."""
    return {
        "HostelName": _or_placeholder(_defined(hostel.get("HostelName"), assignment.get("HostelID")), "-"),
        "RoomNumber": _or_placeholder(_defined(assignment.get("RoomNo")), "-"),
        "MonthlyFee": _or_placeholder(_defined(hostel.get("MonthlyFee")), "-"),
        "CheckInDate": _or_placeholder(_defined(assignment.get("CheckInDate")), "-"),
        "WardenName": _or_placeholder(_defined(hostel.get("WardenName")), ""),
        "WardenPhone": _or_placeholder(_defined(hostel.get("WardenPhone")), ""),
        "Floor": _or_placeholder(_defined(assignment.get("Floor"), hostel.get("Floor")), ""),
        "RoomType": _or_placeholder(_defined(assignment.get("RoomType"), hostel.get("RoomType")), ""),
    }


def compose_hostel_view(store: DocumentStore, student_id: str) -> Dict[str, Any]:
    assignment = queries.first_in_partition(store, tables.HOSTEL_ASSIGNED, student_id)
    if assignment is None:
        raise NotFound("Not found")

    hostel: Dict[str, Any] = {}
    hostel_id = assignment.get("HostelID")
    if hostel_id:
        hostel = queries.get_by_key(store, tables.HOSTEL, tables.HOSTEL.key(hostel_id)) or {}
        if not hostel:
            logger.warning(f"Hostel {hostel_id} referenced by {student_id} has no metadata, using defaults")

    return merge_hostel_view(assignment, hostel)


def compose_faculty_feedback_roster(store: DocumentStore, course_id: str, semester: Any) -> List[Dict[str, Any]]:
    """
    Faculty teaching each subject of a course semester.

    When several assignments share a subject code the first one wins.
    Subjects without an assignment or a faculty document are left out.
    """
    wanted_semester = to_int(semester)
    subjects = [
        subject
        for subject in queries.query_by_partition(store, tables.SUBJECTS, course_id)
        if to_int(subject.get("Semester")) == wanted_semester
    ]
    assignments = queries.query_by_partition(
        store, tables.FACULTY_ASSIGNMENTS, tables.composite_key(course_id, semester)
    )

    roster = []
    for subject in subjects:
        assignment = next((a for a in assignments if a.get("SubjectCode") == subject.get("SubjectCode")), None)
        if assignment is None or not assignment.get("FacultyID") or not subject.get("Branch"):
            continue
        faculty = queries.get_by_key(
            store, tables.FACULTY, tables.FACULTY.key(assignment.get("FacultyID"), subject.get("Branch"))
        )
        if faculty is None:
            logger.warning(
                f"Faculty {assignment.get('FacultyID')} ({subject.get('Branch')}) assigned to "
                f"{subject.get('SubjectCode')} not found, skipping"
            )
            continue
        roster.append({
            "FacultyID": faculty.get("FacultyID"),
            "FacultyName": faculty.get("Name"),
            "SubjectCode": subject.get("SubjectCode"),
            "SubjectName": subject.get("SubjectName"),
        })
    return roster


def compose_results_view(store: DocumentStore, student_id: str, semester: Any) -> Dict[str, Any]:
    # Subjects and summary are returned side by side, totals are not cross-checked
    subjects = queries.query_by_partition_and_sort_prefix(store, tables.RESULTS, student_id, semester)
    summary = queries.get_by_key(
        store, tables.SEMESTER_SUMMARY, tables.SEMESTER_SUMMARY.key(student_id, to_int(semester))
    )
    return {"subjects": subjects, "summary": summary}
