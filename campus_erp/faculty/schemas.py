from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class FacultyProfileUpdate(BaseModel):
    """
    Fields a faculty member may change on their own profile.
    Key attributes (FacultyID, Department) cannot be changed here.
    """
    Name: Optional[str] = None
    OfficialEmail: Optional[str] = None
    PersonalEmail: Optional[str] = None
    PhoneNo: Optional[str] = None
    Designation: Optional[str] = None
    Qualification: Optional[str] = None
    Specialization: Optional[str] = None
    JoiningDate: Optional[str] = None
    DOB: Optional[str] = None
    Gender: Optional[str] = None
    Address: Optional[str] = None
    PhotoURL: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def field_updates(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class FacultyProfileUpdateResponse(BaseModel):
    success: bool
    message: str
    data: Dict[str, Any]
