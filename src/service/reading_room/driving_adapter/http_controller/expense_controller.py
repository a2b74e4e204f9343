from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.expense_command_use_case import ExpenseCommandUseCase
from src.service.reading_room.app.query.expense_query_use_case import ExpenseQueryUseCase
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import require_staff
from src.service.reading_room.driving_adapter.http_controller.schema.expense_schema import (
    ExpenseCreateRequest,
    ExpenseResponse,
    ExpenseUpdateRequest,
)
from src.service.reading_room.driving_adapter.http_controller.schema.subscription_schema import (
    MessageResponse,
)


router = APIRouter()


@router.get('', response_model=List[ExpenseResponse])
@Logger.io
async def list_expenses(
    current_user: UserEntity = Depends(require_staff),
    use_case: ExpenseQueryUseCase = Depends(ExpenseQueryUseCase.depends),
) -> List[ExpenseResponse]:
    expenses = await use_case.list_expenses(actor=current_user)
    return [ExpenseResponse.model_validate(expense) for expense in expenses]


@router.post('', response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_expense(
    request: ExpenseCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: ExpenseCommandUseCase = Depends(ExpenseCommandUseCase.depends),
) -> ExpenseResponse:
    expense = await use_case.create(
        actor=current_user,
        description=request.description,
        amount=request.amount,
        category=request.category.value,
        method=request.method.value,
        location_id=request.location_id,
        spent_on=request.spent_on,
        paid_to=request.paid_to,
    )
    return ExpenseResponse.model_validate(expense)


@router.put('/{expense_id}', response_model=ExpenseResponse)
@Logger.io
async def update_expense(
    expense_id: int,
    request: ExpenseUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: ExpenseCommandUseCase = Depends(ExpenseCommandUseCase.depends),
) -> ExpenseResponse:
    expense = await use_case.update(
        actor=current_user, expense_id=expense_id, **request.model_dump(exclude_unset=True)
    )
    return ExpenseResponse.model_validate(expense)


@router.delete('/{expense_id}', response_model=MessageResponse)
@Logger.io
async def delete_expense(
    expense_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: ExpenseCommandUseCase = Depends(ExpenseCommandUseCase.depends),
) -> MessageResponse:
    await use_case.delete(actor=current_user, expense_id=expense_id)
    return MessageResponse(message='Expense deleted')
