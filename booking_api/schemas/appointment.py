from datetime import date as Date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class AppointmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    doctor_id: int = Field(alias="doctorId")
    date: Date
    time: str
    reason: str

class AppointmentStatusUpdate(BaseModel):
    status: str

class Party(BaseModel):
    """Identity fields joined into appointment listings."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str

class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    date: Date
    time: str
    status: str
    reason: str
    created_at: Optional[datetime] = None

class AppointmentWithPatient(AppointmentResponse):
    patient: Optional[Party] = None

class AppointmentWithDoctor(AppointmentResponse):
    doctor: Optional[Party] = None

class AppointmentWithParties(AppointmentResponse):
    patient: Optional[Party] = None
    doctor: Optional[Party] = None

class AppointmentEnvelope(BaseModel):
    message: str
    appointment: AppointmentResponse

class MessageResponse(BaseModel):
    message: str
