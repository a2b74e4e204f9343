from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends
from uuid_utils import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.service.subscription_terminator import SubscriptionTerminator


class ExpireLapsedSubscriptionsUseCase:
    """Terminate every active subscription whose end date has passed, freed seats dispatched"""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, now: Optional[datetime] = None) -> List[UUID]:
        now = now or datetime.now(timezone.utc)
        async with self.uow:
            lapsed_ids = await self.uow.subscriptions.list_lapsed_ids(now=now)
            terminator = SubscriptionTerminator(self.uow)
            for subscription_id in lapsed_ids:
                await terminator.terminate(subscription_id=subscription_id, trigger='lapsed')
            await self.uow.commit()

        Logger.base.info(f'⏰ [EXPIRE] {len(lapsed_ids)} lapsed subscriptions terminated')
        return lapsed_ids
