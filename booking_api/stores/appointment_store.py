from sqlalchemy.orm import Session, joinedload
from typing import Iterable, List, Optional

from ..core.exceptions import RecordNotFoundError
from ..models.appointment import Appointment

class AppointmentStore:
    """Appointment records. ``join`` names the parties to load alongside."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, join: Iterable[str] = ()):
        query = self.db.query(Appointment)
        for party in join:
            query = query.options(joinedload(getattr(Appointment, party)))
        return query

    def create(self, **fields) -> Appointment:
        appointment = Appointment(**fields)
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def find_by_id(self, appointment_id: int, join: Iterable[str] = ()) -> Optional[Appointment]:
        return self._query(join).filter(Appointment.id == appointment_id).first()

    def find_all(self, join: Iterable[str] = ()) -> List[Appointment]:
        return self._query(join).order_by(Appointment.id).all()

    def find_by(self, join: Iterable[str] = (), **filters) -> List[Appointment]:
        return self._query(join).filter_by(**filters).order_by(Appointment.id).all()

    def update(self, appointment_id: int, **fields) -> Appointment:
        appointment = self.find_by_id(appointment_id)
        if not appointment:
            raise RecordNotFoundError("Appointment", appointment_id)

        for key, value in fields.items():
            setattr(appointment, key, value)

        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def delete(self, appointment_id: int) -> Appointment:
        appointment = self.find_by_id(appointment_id)
        if not appointment:
            raise RecordNotFoundError("Appointment", appointment_id)

        self.db.delete(appointment)
        self.db.commit()
        return appointment
