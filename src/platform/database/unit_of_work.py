"""
Unit of work: one session, one transaction, every repository.

Terminate, enroll and dispatch touch the subscription, seat, payment and waiting list
tables together. They all go through one AbstractUnitOfWork so that either every write
lands or none does:

    async with uow:
        subscription = await uow.subscriptions.get_by_id(subscription_id=..., for_update=True)
        await uow.seats.update(seat=seat.free())
        await uow.commit()

Leaving the block without commit() rolls back, so does an exception.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.reading_room.app.interface.i_action_log_repo import IActionLogRepo
    from src.service.reading_room.app.interface.i_expense_repo import IExpenseRepo
    from src.service.reading_room.app.interface.i_fee_type_repo import IFeeTypeRepo
    from src.service.reading_room.app.interface.i_grievance_repo import IGrievanceRepo
    from src.service.reading_room.app.interface.i_inventory_repo import IInventoryRepo
    from src.service.reading_room.app.interface.i_location_repo import ILocationRepo
    from src.service.reading_room.app.interface.i_member_repo import IMemberRepo
    from src.service.reading_room.app.interface.i_payment_repo import IPaymentRepo
    from src.service.reading_room.app.interface.i_seat_repo import ISeatRepo
    from src.service.reading_room.app.interface.i_subscription_repo import ISubscriptionRepo
    from src.service.reading_room.app.interface.i_user_repo import IUserRepo
    from src.service.reading_room.app.interface.i_waiting_list_repo import IWaitingListRepo


class AbstractUnitOfWork(abc.ABC):
    members: IMemberRepo
    locations: ILocationRepo
    seats: ISeatRepo
    subscriptions: ISubscriptionRepo
    payments: IPaymentRepo
    waiting_list: IWaitingListRepo
    users: IUserRepo
    inventory: IInventoryRepo
    expenses: IExpenseRepo
    grievances: IGrievanceRepo
    fee_types: IFeeTypeRepo
    action_logs: IActionLogRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        # A no-op after commit()
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.reading_room.driven_adapter.repo.action_log_repo_impl import (
            ActionLogRepoImpl,
        )
        from src.service.reading_room.driven_adapter.repo.expense_repo_impl import ExpenseRepoImpl
        from src.service.reading_room.driven_adapter.repo.fee_type_repo_impl import FeeTypeRepoImpl
        from src.service.reading_room.driven_adapter.repo.grievance_repo_impl import (
            GrievanceRepoImpl,
        )
        from src.service.reading_room.driven_adapter.repo.inventory_repo_impl import (
            InventoryRepoImpl,
        )
        from src.service.reading_room.driven_adapter.repo.location_repo_impl import (
            LocationRepoImpl,
        )
        from src.service.reading_room.driven_adapter.repo.member_repo_impl import MemberRepoImpl
        from src.service.reading_room.driven_adapter.repo.payment_repo_impl import PaymentRepoImpl
        from src.service.reading_room.driven_adapter.repo.seat_repo_impl import SeatRepoImpl
        from src.service.reading_room.driven_adapter.repo.subscription_repo_impl import (
            SubscriptionRepoImpl,
        )
        from src.service.reading_room.driven_adapter.repo.user_repo_impl import UserRepoImpl
        from src.service.reading_room.driven_adapter.repo.waiting_list_repo_impl import (
            WaitingListRepoImpl,
        )

        self.members = MemberRepoImpl(session=self.session)
        self.locations = LocationRepoImpl(session=self.session)
        self.seats = SeatRepoImpl(session=self.session)
        self.subscriptions = SubscriptionRepoImpl(session=self.session)
        self.payments = PaymentRepoImpl(session=self.session)
        self.waiting_list = WaitingListRepoImpl(session=self.session)
        self.users = UserRepoImpl(session=self.session)
        self.inventory = InventoryRepoImpl(session=self.session)
        self.expenses = ExpenseRepoImpl(session=self.session)
        self.grievances = GrievanceRepoImpl(session=self.session)
        self.fee_types = FeeTypeRepoImpl(session=self.session)
        self.action_logs = ActionLogRepoImpl(session=self.session)
        await super().__aenter__()
        return self

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency, the session is closed by get_async_session after the response"""
    return SqlAlchemyUnitOfWork(session)
