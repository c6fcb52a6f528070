"""ICS-212 양식 레포지토리.

Vehicle inspection form repository — Handles ics212_forms DB queries.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.vehicle_inspection import VehicleInspectionForm
from app.repositories.base import BaseRepository


class VehicleInspectionRepository(BaseRepository[VehicleInspectionForm]):

    def __init__(self) -> None:
        super().__init__(VehicleInspectionForm)

    async def get_by_form_id(self, db: AsyncSession, form_id: str) -> VehicleInspectionForm | None:
        result = await db.execute(
            select(VehicleInspectionForm).where(VehicleInspectionForm.form_id == form_id)
        )
        return result.scalar_one_or_none()

    async def get_filtered(
        self,
        db: AsyncSession,
        release_decision: str | None = None,
        vehicle_id_no: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[VehicleInspectionForm], int]:
        query: Select = select(VehicleInspectionForm).order_by(
            VehicleInspectionForm.created_at.desc(), VehicleInspectionForm.id.desc()
        )
        if release_decision:
            query = query.where(VehicleInspectionForm.release_decision == release_decision.lower())
        if vehicle_id_no:
            query = query.where(VehicleInspectionForm.vehicle_id_no == vehicle_id_no)
        return await self.get_paginated(db, query, page, per_page)

    async def get_vehicle_history(
        self,
        db: AsyncSession,
        vehicle_id_no: str,
        exclude_form_id: str,
        limit: int = 10,
    ) -> Sequence[VehicleInspectionForm]:
        """같은 차량의 이전 양식 목록 (Other forms for the same vehicle, newest first)."""
        result = await db.execute(
            select(VehicleInspectionForm)
            .where(
                VehicleInspectionForm.vehicle_id_no == vehicle_id_no,
                VehicleInspectionForm.form_id != exclude_form_id,
            )
            .order_by(VehicleInspectionForm.created_at.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def count_since(self, db: AsyncSession, since: datetime | None = None) -> int:
        query: Select = select(func.count()).select_from(VehicleInspectionForm)
        if since is not None:
            query = query.where(VehicleInspectionForm.created_at >= since)
        return (await db.execute(query)).scalar() or 0

    async def count_by_decision(self, db: AsyncSession, release_decision: str) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(VehicleInspectionForm)
            .where(VehicleInspectionForm.release_decision == release_decision)
        )
        return result.scalar() or 0

    async def get_all(self, db: AsyncSession) -> Sequence[VehicleInspectionForm]:
        result = await db.execute(
            select(VehicleInspectionForm).order_by(VehicleInspectionForm.created_at.desc())
        )
        return result.scalars().all()


vehicle_inspection_repository: VehicleInspectionRepository = VehicleInspectionRepository()
