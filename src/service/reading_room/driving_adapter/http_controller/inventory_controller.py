from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.inventory_command_use_case import (
    InventoryCommandUseCase,
)
from src.service.reading_room.app.query.inventory_query_use_case import InventoryQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import require_staff
from src.service.reading_room.driving_adapter.http_controller.schema.inventory_schema import (
    InventoryCreateRequest,
    InventoryResponse,
    InventoryUpdateRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[InventoryResponse])
@Logger.io
async def list_inventory(
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryQueryUseCase = Depends(InventoryQueryUseCase.depends),
) -> List[InventoryResponse]:
    items = await use_case.list_items(actor=current_user)
    return [InventoryResponse.model_validate(item) for item in items]


@router.post('', response_model=InventoryResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_inventory_item(
    request: InventoryCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryCommandUseCase = Depends(InventoryCommandUseCase.depends),
) -> InventoryResponse:
    [item] = await use_case.create_many(actor=current_user, items=[request.to_fields()])
    return InventoryResponse.model_validate(item)


@router.post('/bulk', response_model=List[InventoryResponse], status_code=status.HTTP_201_CREATED)
@Logger.io
async def bulk_create_inventory(
    request: List[InventoryCreateRequest],
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryCommandUseCase = Depends(InventoryCommandUseCase.depends),
) -> List[InventoryResponse]:
    items = await use_case.create_many(
        actor=current_user, items=[entry.to_fields() for entry in request]
    )
    return [InventoryResponse.model_validate(item) for item in items]


@router.get('/{item_id}', response_model=InventoryResponse)
@Logger.io
async def get_inventory_item(
    item_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryQueryUseCase = Depends(InventoryQueryUseCase.depends),
) -> InventoryResponse:
    item = await use_case.get_item(actor=current_user, item_id=item_id)
    return InventoryResponse.model_validate(item)


@router.put('/{item_id}', response_model=InventoryResponse)
@Logger.io
async def update_inventory_item(
    item_id: int,
    request: InventoryUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryCommandUseCase = Depends(InventoryCommandUseCase.depends),
) -> InventoryResponse:
    item = await use_case.update(
        actor=current_user, item_id=item_id, **request.model_dump(exclude_unset=True)
    )
    return InventoryResponse.model_validate(item)


@router.delete('/{item_id}', response_model=MessageResponse)
@Logger.io
async def delete_inventory_item(
    item_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: InventoryCommandUseCase = Depends(InventoryCommandUseCase.depends),
) -> MessageResponse:
    await use_case.delete(actor=current_user, item_id=item_id)
    return MessageResponse(message='Inventory item deleted')
