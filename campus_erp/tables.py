"""
Key schema of every DynamoDB table the gateway reads or writes.

Composite sort keys are stored as a single string attribute whose name and
value both join two logical fields with `KEY_DELIMITER`, e.g. the Results
sort key attribute is literally named "Semester#SubjectCode" and holds
values like "3#CS301".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

KEY_DELIMITER = "#"


@dataclass(frozen=True)
class Table:
    name: str
    partition_key: str
    sort_key: Optional[str] = None

    def key(self, partition_value: Any, sort_value: Any = None) -> Dict[str, Any]:
        key = {self.partition_key: partition_value}
        if self.sort_key is not None:
            if sort_value is None:
                raise ValueError(f"{self.name} requires a {self.sort_key} value")
            key[self.sort_key] = sort_value
        return key


def composite_key(*parts: Any) -> str:
    return KEY_DELIMITER.join(str(part) for part in parts)


STUDENT = Table("Student", "StudentID")
FACULTY = Table("Faculty", "FacultyID", "Department")
ADMIN = Table("Admin", "AdminID")

COURSE_DETAILS = Table("CourseDetails", "CourseID")
COURSE_SECTIONS = Table("CourseSections", "CourseID", "Semester")
SUBJECTS = Table("Subjects", "CourseID", "SubjectCode")
FEES_STRUCTURE = Table("FeesStructure", "CourseID", "Sem")
CIRCULARS = Table("Circulars", "CourseID", "PublishedAt")
EXAM_SCHEDULE = Table("ExamSchedule", "CourseID", "Semester#ExamDateTime")
RESOURCES = Table("Resources", "ResourceID")
FACULTY_ASSIGNMENTS = Table("FacultyAssignments", "CourseSemester", "SubjectCode#Section")

FEES_PAID = Table("FeesPaid", "StudentID", "Sem")
ATTENDANCE = Table("Attendance", "StudentID", "Date#SubjectCode")
ADMIT_CARDS = Table("AdmitCards", "StudentID", "Semester")
RESULTS = Table("Results", "StudentID", "Semester#SubjectCode")
SEMESTER_SUMMARY = Table("SemesterSummary", "StudentID", "Semester")
GRIEVANCES = Table("Grievances", "StudentID", "GrievanceID")
FEEDBACK = Table("Feedback", "StudentID", "Semester#SubjectCode")

HOSTEL = Table("Hostel", "HostelID")
HOSTEL_ASSIGNED = Table("HostelAssigned", "StudentID")
HOSTEL_FEE = Table("HostelFee", "StudentID")
HOSTEL_COMPLAINT = Table("HostelComplaint", "StudentID", "ComplaintID")

PLACEMENT_STATS = Table("PlacementStats", "CourseID")
PLACEMENT_DRIVES = Table("PlacementDrives", "CourseID", "CompanyID")
PLACEMENT_PROFILE = Table("StudentPlacementProfile", "StudentID")
PLACEMENT_APPLICATIONS = Table("PlacementApplications", "StudentID", "CompanyID")
