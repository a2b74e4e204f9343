from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reading_room_metrics import metrics
from src.service.reading_room.app.service.seat_registry import SeatRegistry


class ReconcileSeatsUseCase:
    """
    Free every occupied seat whose subscription is expired or gone.

    Bare occupancies (member without a subscription) are kept: they are how the
    waiting list hands out seats when no terms were recorded.
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
        return cls(uow=uow)

    @Logger.io
    async def execute(self) -> int:
        async with self.uow:
            occupied = [
                seat
                for seat in await self.uow.seats.list_occupied()
                if seat.subscription_id is not None
            ]
            active_ids = await self.uow.subscriptions.list_active_ids(
                subscription_ids=[seat.subscription_id for seat in occupied]  # type: ignore[misc]
            )

            registry = SeatRegistry(self.uow)
            freed = 0
            for seat in occupied:
                if seat.subscription_id not in active_ids:
                    await registry.free(seat=seat)
                    freed += 1
            await self.uow.commit()

        metrics.record_reconciliation(freed=freed)
        Logger.base.info(f'🧹 [RECONCILE] Freed {freed} seats with expired or missing subscriptions')
        return freed
