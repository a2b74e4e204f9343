from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.reading_room.domain.enum.expense_enums import ExpenseCategory, ExpenseMethod


class ExpenseCreateRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    amount: int = Field(..., gt=0)
    category: ExpenseCategory
    method: ExpenseMethod
    location_id: Optional[int] = None
    paid_to: Optional[str] = Field(None, max_length=255)
    spent_on: Optional[datetime] = Field(None, description='Defaults to now')

    class Config:
        json_schema_extra = {
            'example': {
                'description': 'Electricity bill, March',
                'amount': 8200,
                'category': 'Utilities',
                'method': 'Bank Transfer',
                'location_id': 1,
                'paid_to': 'State Electricity Board',
            }
        }


class ExpenseUpdateRequest(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    amount: Optional[int] = Field(None, gt=0)
    category: Optional[ExpenseCategory] = None
    method: Optional[ExpenseMethod] = None
    location_id: Optional[int] = None
    paid_to: Optional[str] = Field(None, max_length=255)
    spent_on: Optional[datetime] = None


class ExpenseResponse(BaseModel):
    id: int
    description: str
    amount: int
    category: ExpenseCategory
    method: ExpenseMethod
    location_id: int
    paid_to: Optional[str] = None
    spent_on: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
