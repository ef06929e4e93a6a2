from .user import User
from .appointment import Appointment, AppointmentStatus

__all__ = ["User", "Appointment", "AppointmentStatus"]
