from fastapi import Depends
from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.subscription_terminator import SubscriptionTerminator


class TerminateSubscriptionUseCase:
    """
    End a subscription now.

    Flow (one transaction):
    1. Lock and expire the subscription
    2. Free its seat
    3. Hand the seat to the head of the waiting list, if any
    4. Commit
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, subscription_id: UUID) -> str:
        async with self.uow:
            try:
                await SubscriptionTerminator(self.uow).terminate(subscription_id=subscription_id)
                await self.uow.commit()
            except Exception:
                Logger.base.error(
                    f'❌ [TERMINATE] Rolling back termination of subscription {subscription_id}'
                )
                raise

        return 'Subscription ended'
