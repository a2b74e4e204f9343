from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class MemberCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)
    address: str = Field('', max_length=500)
    exam_prep: Optional[str] = Field(None, max_length=255)

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Ravi Kumar',
                'email': 'ravi@example.com',
                'phone': '9876543210',
                'address': '4 Lake View',
                'exam_prep': 'UPSC',
            }
        }


class MemberUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    address: Optional[str] = Field(None, max_length=500)
    exam_prep: Optional[str] = Field(None, max_length=255)


class MemberResponse(BaseModel):
    id: int
    member_code: Optional[str] = None
    name: str
    email: str
    phone: str
    address: str
    exam_prep: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
