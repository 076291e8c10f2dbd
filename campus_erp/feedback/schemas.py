from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional

from campus_erp.tables import composite_key


class FeedbackCreate(BaseModel):
    StudentID: str = Field(..., min_length=1)
    FacultyID: str = Field(..., min_length=1)
    SubjectCode: str = Field(..., min_length=1)
    Semester: int = Field(..., ge=1)
    CourseID: Optional[str] = None
    FacultyName: Optional[str] = None
    SubjectName: Optional[str] = None
    Ratings: Dict[str, int] = Field(default_factory=dict)
    Comments: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_document(self) -> dict:
        document = self.model_dump(exclude_none=True)
        document["Semester#SubjectCode"] = composite_key(self.Semester, self.SubjectCode)
        document["SubmittedAt"] = date.today().isoformat()
        return document
