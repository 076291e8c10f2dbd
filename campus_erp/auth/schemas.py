from pydantic import BaseModel, ConfigDict, field_validator
from typing import Any, Dict


class LoginRequest(BaseModel):
    userId: str

    model_config = ConfigDict(extra="forbid")

    @field_validator('userId')
    @classmethod
    def validate_user_id(cls, v):
        if not v or not v.strip():
            raise ValueError('UserID required')
        return v.strip()


class LoginUser(BaseModel):
    type: str
    id: str


class LoginResponse(BaseModel):
    success: bool
    user: LoginUser
    studentData: Dict[str, Any]
