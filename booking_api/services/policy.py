"""
Appointment access rules.

``decide`` answers one question: may this actor perform this action on this
appointment, and if so, what may it change? It touches neither the database
nor the request, so callers look up the records first and pass them in.
Records only need ``id``/``role`` (users) and ``patient_id``/``doctor_id``
(appointments) attributes.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from ..core.security import UserRole
from ..models.appointment import AppointmentStatus

class Action(str, Enum):
    BOOK = "book"
    LIST_ALL = "list_all"
    LIST_AS_DOCTOR = "list_as_doctor"
    LIST_AS_PATIENT = "list_as_patient"
    VIEW = "view"
    UPDATE_STATUS = "update_status"
    CANCEL = "cancel"

class Effect(str, Enum):
    CREATE = "create"
    LIST = "list"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

@dataclass(frozen=True)
class Actor:
    id: int
    role: UserRole

@dataclass(frozen=True)
class Allow:
    effect: Effect
    changes: Dict[str, Any] = field(default_factory=dict)
    filters: Dict[str, Any] = field(default_factory=dict)
    join: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Deny:
    reason: str

@dataclass(frozen=True)
class NotFound:
    reason: str

Decision = Union[Allow, Deny, NotFound]

APPOINTMENT_NOT_FOUND = "Appointment not found"

def decide(
    actor: Actor,
    action: Action,
    appointment=None,
    *,
    doctor=None,
    booking: Optional[Dict[str, Any]] = None,
    status: Optional[str] = None,
) -> Decision:
    """Return the decision for ``actor`` attempting ``action``.

    ``appointment`` is the target record, or None when the id did not
    resolve. ``doctor`` is the user named by a booking, ``booking`` its
    date/time/reason, and ``status`` the requested status for an update.
    """
    if action == Action.BOOK:
        return _book(actor, doctor, booking or {})
    if action == Action.LIST_ALL:
        if actor.role != UserRole.ADMIN:
            return Deny("Access denied. Admins only")
        return Allow(Effect.LIST, join=("patient", "doctor"))
    if action == Action.LIST_AS_DOCTOR:
        if actor.role != UserRole.DOCTOR:
            return Deny("Access denied. Doctors only")
        return Allow(Effect.LIST, filters={"doctor_id": actor.id}, join=("patient",))
    if action == Action.LIST_AS_PATIENT:
        if actor.role != UserRole.PATIENT:
            return Deny("Access denied. Patients only")
        return Allow(Effect.LIST, filters={"patient_id": actor.id}, join=("doctor",))
    if action == Action.VIEW:
        return _view(actor, appointment)
    if action == Action.UPDATE_STATUS:
        return _update_status(actor, appointment, status)
    if action == Action.CANCEL:
        return _cancel(actor, appointment)
    raise ValueError(f"Unknown action: {action!r}")

def _book(actor: Actor, doctor, booking: Dict[str, Any]) -> Decision:
    if actor.role != UserRole.PATIENT:
        return Deny("Only patients can book appointments")
    if doctor is None or doctor.role != UserRole.DOCTOR:
        return NotFound("Doctor not found")

    changes = {
        "date": booking.get("date"),
        "time": booking.get("time"),
        "reason": booking.get("reason"),
        "patient_id": actor.id,
        "doctor_id": doctor.id,
        "status": AppointmentStatus.PENDING.value,
    }
    return Allow(Effect.CREATE, changes=changes)

def _view(actor: Actor, appointment) -> Decision:
    if appointment is None:
        return NotFound(APPOINTMENT_NOT_FOUND)
    if actor.role == UserRole.ADMIN:
        return Allow(Effect.READ, join=("patient", "doctor"))
    if actor.role == UserRole.DOCTOR and appointment.doctor_id == actor.id:
        return Allow(Effect.READ, join=("patient", "doctor"))
    if actor.role == UserRole.PATIENT and appointment.patient_id == actor.id:
        return Allow(Effect.READ, join=("patient", "doctor"))
    return Deny("Access denied. You can only view your own appointments")

def _update_status(actor: Actor, appointment, status: Optional[str]) -> Decision:
    if actor.role not in (UserRole.DOCTOR, UserRole.ADMIN):
        return Deny("Access denied. Only doctors or admins can update appointments")
    if appointment is None:
        return NotFound(APPOINTMENT_NOT_FOUND)
    if actor.role == UserRole.DOCTOR and appointment.doctor_id != actor.id:
        return Deny("Access denied. You can only update your own appointments")
    return Allow(Effect.UPDATE, changes={"status": status})

def _cancel(actor: Actor, appointment) -> Decision:
    if appointment is None:
        return NotFound(APPOINTMENT_NOT_FOUND)
    if actor.role == UserRole.ADMIN:
        return Allow(Effect.DELETE)
    if actor.role == UserRole.PATIENT:
        if appointment.patient_id != actor.id:
            return Deny("Access denied. You can only cancel your own appointments")
        return Allow(Effect.DELETE)
    return Deny("Access denied")
