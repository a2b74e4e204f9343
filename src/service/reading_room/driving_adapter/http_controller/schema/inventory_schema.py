from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.service.reading_room.domain.enum.inventory_enums import InventoryCategory, InventoryStatus


class InventoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: InventoryCategory
    # Optional here so a missing location is reported by the entity as a 400
    location_id: Optional[int] = None
    quantity: int = Field(1, ge=1)
    amount: int = Field(0, ge=0)
    status: InventoryStatus = InventoryStatus.WORKING
    purchase_date: Optional[datetime] = None
    last_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    serial_number: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Split AC 1.5 ton',
                'category': 'AC',
                'location_id': 1,
                'quantity': 2,
                'amount': 42000,
                'brand': 'Voltas',
            }
        }

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(mode='python')


class InventoryUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[InventoryCategory] = None
    location_id: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=1)
    amount: Optional[int] = Field(None, ge=0)
    status: Optional[InventoryStatus] = None
    purchase_date: Optional[datetime] = None
    last_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    serial_number: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)


class InventoryResponse(BaseModel):
    id: int
    name: str
    category: InventoryCategory
    location_id: int
    quantity: int
    amount: int
    status: InventoryStatus
    purchase_date: Optional[datetime] = None
    last_maintenance_date: Optional[datetime] = None
    notes: Optional[str] = None
    serial_number: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
