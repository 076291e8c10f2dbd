import logging
from typing import Any, Dict, List, Optional

from campus_erp import tables
from campus_erp.core import consistency, queries
from campus_erp.core.metrics import sort_numeric, to_int
from campus_erp.database import DocumentStore
from campus_erp.students.schemas import HostelAssignment, StudentRecord

logger = logging.getLogger(__name__)

ALL = "all"


def create_student(store: DocumentStore, student: StudentRecord, hostel_id: str) -> Dict[str, Any]:
    """
    Save the student and assign them the next free room in `hostel_id`.
    """
    data = student.model_dump(mode="json", exclude_none=True)
    store.put(tables.STUDENT, data)
    logger.info(f"[ADD-STUDENT] Saved Student record {student.StudentID}")

    room_no = consistency.allocate_next_room(store, hostel_id)
    assignment = HostelAssignment(
        StudentID=student.StudentID,
        HostelID=hostel_id,
        RoomNo=str(room_no),
        StudentPhoneNo=student.StudentPhoneNo,
    ).model_dump(exclude_none=True)
    store.put(tables.HOSTEL_ASSIGNED, assignment)
    logger.info(f"[ADD-STUDENT] Hostel assigned: {assignment}")

    return {**data, 'hostelAssignment': assignment}


def list_roster(
    store: DocumentStore,
    course_id: Optional[str] = None,
    branch: Optional[str] = None,
    semester: Optional[str] = None,
    section: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Students matching the given filters, ordered by class roll number.
    A filter that is missing or "all" is not applied; section matches ignoring case.
    """
    students = queries.scan_with_filter(store, tables.STUDENT)

    if course_id and course_id != ALL:
        students = [s for s in students if s.get('CourseID') == course_id]
    if branch and branch != ALL:
        students = [s for s in students if s.get('Branch') == branch]
    if semester and semester != ALL:
        students = [s for s in students if to_int(s.get('CurrentSem')) == to_int(semester)]
    if section and section.strip():
        students = queries.filter_equals_ignore_case(students, 'Section', section)

    return sort_numeric(students, 'ClassRollNo')
