"""
Appointment Booking API

A FastAPI service for booking appointments between patients and doctors,
with token authentication and role-based access rules.
"""

__version__ = "1.0.0"
