from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession


TModel = TypeVar("TModel")


def _values(payload: Any) -> dict[str, Any]:
    """Column values from a dict or a Pydantic model (only fields that were set)."""

    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


class BaseCRUD(Generic[TModel]):
    """Async CRUD helper for one mapped class.

    Writes are flushed so generated values are visible, but never committed:
    the store owning the session decides the transaction boundary.
    """

    def __init__(self, model: type[TModel]) -> None:
        self.model = model

    def _where(self, q: Select, filters: Mapping[str, Any]) -> Select:
        # None means "no filter" so optional query params pass straight through.
        for key, value in filters.items():
            if value is not None:
                q = q.where(getattr(self.model, key) == value)
        return q

    async def create(self, session: AsyncSession, *, obj_in: Any) -> TModel:
        obj = self.model(**_values(obj_in))  # type: ignore[call-arg]
        session.add(obj)
        await session.flush()
        return obj

    async def get(self, session: AsyncSession, *, id: Any, for_update: bool = False) -> TModel | None:
        q = select(self.model).where(getattr(self.model, "id") == id)
        if for_update:
            q = q.with_for_update()
        return (await session.execute(q)).scalar_one_or_none()

    async def get_by(self, session: AsyncSession, **filters: Any) -> TModel | None:
        q = self._where(select(self.model), filters).limit(1)
        return (await session.execute(q)).scalars().first()

    async def get_multi(
        self,
        session: AsyncSession,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[TModel]:
        q = self._where(select(self.model), filters or {})
        if order_by is not None:
            q = q.order_by(getattr(self.model, order_by))
        return list((await session.execute(q)).scalars().all())

    async def update(self, session: AsyncSession, *, db_obj: TModel, obj_in: Any) -> TModel:
        for field, value in _values(obj_in).items():
            if not hasattr(self.model, field):
                raise AttributeError(f"{self.model.__name__} has no column {field!r}")
            setattr(db_obj, field, value)
        await session.flush()
        return db_obj

    async def delete(self, session: AsyncSession, *, id: Any) -> bool:
        obj = await self.get(session, id=id)
        if obj is None:
            return False
        await session.delete(obj)
        await session.flush()
        return True

    async def delete_where(self, session: AsyncSession, **filters: Any) -> None:
        stmt = delete(self.model)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        await session.execute(stmt)
