from typing import Any, Dict

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class PaymentHistoryUseCase:
    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, member_code: str) -> Dict[str, Any]:
        async with self.uow:
            member = await self.uow.members.get_by_code(member_code=member_code)
            if not member:
                raise NotFoundError('Member not found')
            assert member.id is not None
            payments = await self.uow.payments.list_by_member(member_id=member.id)

        return {
            'member': member,
            'payments': payments,
            'summary': {
                'total_payments': len(payments),
                'total_paid': sum(payment.amount for payment in payments),
            },
        }
