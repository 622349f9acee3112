from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List, Optional


class SchoolBase(BaseModel):
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str


class SchoolCreate(SchoolBase):
    pass


class SchoolRead(SchoolBase):
    id: int
    image_path: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SchoolListResponse(BaseModel):
    schools: List[SchoolRead]


class SchoolCreatedResponse(BaseModel):
    message: str
    id: int


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    code: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    error: str
    fields: Dict[str, str]
