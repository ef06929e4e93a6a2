from sqlalchemy.orm import Session
from typing import List
import logging

from ..core.exceptions import AuthorizationError, NotFoundError, RecordNotFoundError
from ..models.appointment import Appointment
from ..schemas.appointment import AppointmentCreate
from ..stores.appointment_store import AppointmentStore
from ..stores.identity_store import IdentityStore
from .policy import APPOINTMENT_NOT_FOUND, Action, Actor, Allow, Decision, Deny, decide

logger = logging.getLogger(__name__)

class AppointmentService:
    """Runs policy decisions for one actor against the appointment store."""

    def __init__(self, db: Session, actor: Actor):
        self.actor = actor
        self.appointments = AppointmentStore(db)
        self.users = IdentityStore(db)

    def _enforce(self, action: Action, decision: Decision) -> Allow:
        if isinstance(decision, Allow):
            return decision
        if isinstance(decision, Deny):
            logger.warning(
                f"Denied {action.value} for user {self.actor.id} ({self.actor.role.value}): {decision.reason}"
            )
            raise AuthorizationError(decision.reason)
        raise NotFoundError(decision.reason)

    def book(self, data: AppointmentCreate) -> Appointment:
        doctor = self.users.find_by_id(data.doctor_id)
        allow = self._enforce(
            Action.BOOK,
            decide(self.actor, Action.BOOK, doctor=doctor, booking=data.model_dump()),
        )

        appointment = self.appointments.create(**allow.changes)
        logger.info(
            f"Patient {self.actor.id} booked appointment {appointment.id} with doctor {appointment.doctor_id}"
        )
        return appointment

    def _list(self, action: Action) -> List[Appointment]:
        allow = self._enforce(action, decide(self.actor, action))
        return self.appointments.find_by(join=allow.join, **allow.filters)

    def list_all(self) -> List[Appointment]:
        return self._list(Action.LIST_ALL)

    def list_for_doctor(self) -> List[Appointment]:
        return self._list(Action.LIST_AS_DOCTOR)

    def list_for_patient(self) -> List[Appointment]:
        return self._list(Action.LIST_AS_PATIENT)

    def get(self, appointment_id: int) -> Appointment:
        appointment = self.appointments.find_by_id(appointment_id, join=("patient", "doctor"))
        self._enforce(Action.VIEW, decide(self.actor, Action.VIEW, appointment))
        return appointment

    def update_status(self, appointment_id: int, status: str) -> Appointment:
        appointment = self.appointments.find_by_id(appointment_id)
        allow = self._enforce(
            Action.UPDATE_STATUS,
            decide(self.actor, Action.UPDATE_STATUS, appointment, status=status),
        )

        try:
            updated = self.appointments.update(appointment_id, **allow.changes)
        except RecordNotFoundError:
            raise NotFoundError(APPOINTMENT_NOT_FOUND)
        logger.info(f"Appointment {appointment_id} status set to {status!r} by user {self.actor.id}")
        return updated

    def cancel(self, appointment_id: int) -> None:
        appointment = self.appointments.find_by_id(appointment_id)
        self._enforce(Action.CANCEL, decide(self.actor, Action.CANCEL, appointment))

        try:
            self.appointments.delete(appointment_id)
        except RecordNotFoundError:
            raise NotFoundError(APPOINTMENT_NOT_FOUND)
        logger.info(f"Appointment {appointment_id} canceled by user {self.actor.id}")
