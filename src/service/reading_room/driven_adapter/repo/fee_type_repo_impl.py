from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_fee_type_repo import IFeeTypeRepo
from src.service.reading_room.domain.entity.fee_type_entity import DUPLICATE_FEE_NAME, FeeType
from src.service.reading_room.driven_adapter.model.fee_type_model import FeeTypeModel
from src.service.reading_room.driven_adapter.repo.session_repo import SessionRepo



class FeeTypeRepoImpl(SessionRepo, IFeeTypeRepo):
    @staticmethod
    def _to_entity(model: FeeTypeModel) -> FeeType:
        return FeeType(
            id=model.id,
            name=model.name,
            amount=model.amount,
            duration=model.duration,
            created_at=model.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, fee_type_id: int) -> FeeType | None:
        async with self._get_session() as session:
            model = await session.get(FeeTypeModel, fee_type_id)
            return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_name(self, *, name: str) -> FeeType | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(FeeTypeModel).where(func.lower(FeeTypeModel.name) == name.strip().lower())
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_all(self) -> List[FeeType]:
        async with self._get_session() as session:
            result = await session.execute(
                select(FeeTypeModel).order_by(
                    FeeTypeModel.created_at.desc(), FeeTypeModel.id.desc()
                )
            )
            return [self._to_entity(model) for model in result.scalars()]

    @Logger.io
    async def create(self, *, fee_type: FeeType) -> FeeType:
        async with self._get_session() as session:
            model = FeeTypeModel(
                name=fee_type.name, amount=fee_type.amount, duration=fee_type.duration
            )
            session.add(model)
            await self._flush_unique(session)
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def update(self, *, fee_type: FeeType) -> FeeType:
        async with self._get_session() as session:
            model = await session.get(FeeTypeModel, fee_type.id)
            if model is None:
                raise NotFoundError('Fee type not found')
            model.name = fee_type.name
            model.amount = fee_type.amount
            model.duration = fee_type.duration
            await self._flush_unique(session)
            return self._to_entity(model)

    @Logger.io
    async def delete(self, *, fee_type_id: int) -> None:
        async with self._get_session() as session:
            await session.execute(delete(FeeTypeModel).where(FeeTypeModel.id == fee_type_id))

    @staticmethod
    async def _flush_unique(session) -> None:
        try:
            await session.flush()
        except IntegrityError as e:
            if 'uq_fee_type_name' in str(e):
                raise ConflictError(DUPLICATE_FEE_NAME) from e
            raise
