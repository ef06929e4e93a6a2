from sqlalchemy import Column, Integer, String, DateTime, Date, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # users.id, unconstrained: deleting a user leaves its appointments behind
    patient_id = Column(Integer, nullable=False, index=True)
    doctor_id = Column(Integer, nullable=False, index=True)

    # Appointment details
    date = Column(Date, nullable=False)
    time = Column(String(20), nullable=False)
    # Plain string: updates store whatever status the caller sends
    status = Column(String(50), nullable=False, default=AppointmentStatus.PENDING.value)
    reason = Column(Text, nullable=False)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())

    patient = relationship(
        "User", primaryjoin="foreign(Appointment.patient_id) == User.id", viewonly=True
    )
    doctor = relationship(
        "User", primaryjoin="foreign(Appointment.doctor_id) == User.id", viewonly=True
    )

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, date='{self.date}', status='{self.status}')>"
