"""Persistence layer for aircraft master data."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from fleetdata.domain.entities import Aircraft
from fleetdata.infrastructure.models import AircraftModel


class AircraftRepository:
    """Provide lookups and inserts for :class:`Aircraft` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> Sequence[Aircraft]:
        query = self.session.query(AircraftModel).order_by(AircraftModel.registration)
        return [self._to_entity(model) for model in query.all()]

    def list(
        self,
        *,
        fleet_group: str | None = None,
        status: str | None = None,
    ) -> Sequence[Aircraft]:
        query = self.session.query(AircraftModel)
        if fleet_group is not None:
            query = query.filter(AircraftModel.fleet_group == fleet_group)
        if status is not None:
            query = query.filter(AircraftModel.status == status)
        query = query.order_by(AircraftModel.registration)
        return [self._to_entity(model) for model in query.all()]

    def get(self, aircraft_id: int) -> Aircraft | None:
        model = self.session.get(AircraftModel, aircraft_id)
        return self._to_entity(model) if model else None

    def get_by_registration(self, registration: str) -> Aircraft | None:
        model = (
            self.session.query(AircraftModel)
            .filter(func.upper(AircraftModel.registration) == registration.strip().upper())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, aircraft: Aircraft) -> Aircraft:
        model = AircraftModel()
        self._apply_entity_to_model(model, aircraft)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: AircraftModel) -> Aircraft:
        return Aircraft(
            id=model.id,
            registration=model.registration,
            fleet_group=model.fleet_group,
            aircraft_type=model.aircraft_type,
            msn=model.msn,
            owner=model.owner,
            manufacture_date=model.manufacture_date,
            certification_date=model.certification_date,
            in_service_date=model.in_service_date,
            engines_count=model.engines_count,
            status=model.status,
            created_by=model.created_by,
            created_at=model.created_at,
        )

    @staticmethod
    def _apply_entity_to_model(model: AircraftModel, aircraft: Aircraft) -> None:
        model.registration = aircraft.registration
        model.fleet_group = aircraft.fleet_group
        model.aircraft_type = aircraft.aircraft_type
        model.msn = aircraft.msn
        model.owner = aircraft.owner
        model.manufacture_date = aircraft.manufacture_date
        model.certification_date = aircraft.certification_date
        model.in_service_date = aircraft.in_service_date
        model.engines_count = aircraft.engines_count
        model.status = aircraft.status
        model.created_by = aircraft.created_by


__all__ = ["AircraftRepository"]
