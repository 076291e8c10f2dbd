"""
Course-scoped catalog endpoints: course details, sections, subjects, fee
structure, circulars and study resources.
"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.core.metrics import sort_numeric, to_int
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import NotFound, require_params

router = APIRouter(tags=["courses"])

@router.get("/api/courses")
@router.get("/api/coursedetails")
def list_courses(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return queries.scan_with_filter(store, tables.COURSE_DETAILS)

@router.get("/coursedetails/{course_id}")
def get_course(course_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    course = queries.get_by_key(store, tables.COURSE_DETAILS, tables.COURSE_DETAILS.key(course_id))
    if course is None:
        raise NotFound("Course not found")
    return course

@router.get("/api/course-sections")
def get_course_sections(
    courseId: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Any]:
    require_params(courseId=courseId, semester=semester)
    items = queries.scan_with_filter(store, tables.COURSE_SECTIONS, CourseID=courseId, Semester=to_int(semester))
    return (items[0].get('Sections') or []) if items else []

@router.get("/api/subjects")
def get_subjects(
    courseId: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
    specialization: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Subjects of a course, optionally narrowed by branch, specialization (any case) and semester."""
    require_params(courseId=courseId)
    subjects = queries.query_by_partition(store, tables.SUBJECTS, courseId)
    subjects = queries.filter_equals_ignore_case(subjects, 'Branch', branch)
    subjects = queries.filter_equals_ignore_case(subjects, 'Specialization', specialization)
    if semester:
        subjects = [s for s in subjects if to_int(s.get('Semester')) == to_int(semester)]
    return subjects

@router.get("/api/subjects/by-code")
def get_subject_by_code(
    courseId: Optional[str] = Query(None),
    subjectCode: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    require_params(courseId=courseId, subjectCode=subjectCode)
    subject = queries.get_by_key(store, tables.SUBJECTS, tables.SUBJECTS.key(courseId, subjectCode))
    return subject or {}

@router.get("/api/feestructure")
def get_fee_structure(courseId: Optional[str] = Query(None), store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    require_params(courseId=courseId)
    return sort_numeric(queries.query_by_partition(store, tables.FEES_STRUCTURE, courseId), 'Sem')

@router.get("/api/circulars/{course_id}")
def get_circulars(course_id: str, store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Circulars of a course, newest first."""
    return queries.query_by_partition(store, tables.CIRCULARS, course_id, descending=True)

@router.get("/api/resources")
def get_resources(
    courseId: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
    semester: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    specialization: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Active study resources for a course, branch and semester."""
    require_params(courseId=courseId, branch=branch, semester=semester)
    filters: Dict[str, Any] = {
        'CourseID': courseId,
        'Branch': branch,
        'Semester': to_int(semester),
        'IsActive': True,
    }
    if section:
        filters['Section'] = section
    if specialization:
        filters['Specialization'] = specialization
    return queries.scan_with_filter(store, tables.RESOURCES, **filters)
