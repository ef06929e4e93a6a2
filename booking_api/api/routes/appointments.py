from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...core.exceptions import store_errors
from ...api.deps import get_current_actor
from ...services.appointment_service import AppointmentService
from ...services.policy import Actor
from ...schemas.appointment import (
    AppointmentCreate, AppointmentStatusUpdate, AppointmentResponse,
    AppointmentEnvelope, AppointmentWithParties, AppointmentWithPatient,
    AppointmentWithDoctor, MessageResponse
)

router = APIRouter(prefix="/appointment", tags=["Appointments"])

@router.post("/", response_model=AppointmentEnvelope, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    data: AppointmentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Book an appointment (patients only)."""
    with store_errors("Error booking appointment"):
        appointment = AppointmentService(db, actor).book(data)

    return AppointmentEnvelope(
        message="Appointment booked successfully",
        appointment=AppointmentResponse.model_validate(appointment),
    )

@router.get("/", response_model=List[AppointmentWithParties])
async def list_appointments(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """List every appointment (admins only)."""
    with store_errors("Error fetching appointments"):
        return AppointmentService(db, actor).list_all()

@router.get("/doctor", response_model=List[AppointmentWithPatient])
async def list_doctor_appointments(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Appointments for the logged-in doctor."""
    with store_errors("Error fetching doctor appointments"):
        return AppointmentService(db, actor).list_for_doctor()

@router.get("/patient", response_model=List[AppointmentWithDoctor])
async def list_patient_appointments(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Appointments for the logged-in patient."""
    with store_errors("Error fetching patient appointments"):
        return AppointmentService(db, actor).list_for_patient()

@router.get("/{appointment_id}", response_model=AppointmentWithParties)
async def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    with store_errors("Error fetching appointment"):
        return AppointmentService(db, actor).get(appointment_id)

@router.put("/{appointment_id}", response_model=AppointmentEnvelope)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Update appointment status (owning doctor or admin)."""
    with store_errors("Error updating appointment"):
        appointment = AppointmentService(db, actor).update_status(appointment_id, data.status)

    return AppointmentEnvelope(
        message="Appointment status updated",
        appointment=AppointmentResponse.model_validate(appointment),
    )

@router.delete("/{appointment_id}", response_model=MessageResponse)
async def cancel_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Cancel an appointment (owning patient or admin)."""
    with store_errors("Error canceling appointment"):
        AppointmentService(db, actor).cancel(appointment_id)

    return MessageResponse(message="Appointment canceled successfully")
