from datetime import date

import pytest

from booking_api.core.exceptions import DuplicateEmailError, RecordNotFoundError
from booking_api.core.security import UserRole
from booking_api.models.appointment import Appointment
from booking_api.stores.appointment_store import AppointmentStore
from booking_api.stores.identity_store import IdentityStore

def add_user(store, name, email, role):
    return store.create(name=name, email=email, password_hash="x", role=role, gender=None)

@pytest.fixture
def identities(db):
    return IdentityStore(db)

@pytest.fixture
def appointments(db):
    return AppointmentStore(db)

class TestIdentityStore:

    def test_create_and_lookup(self, identities):
        user = add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT)

        assert user.id is not None
        assert user.created_at is not None
        assert identities.find_by_id(user.id).email == "pat@example.com"
        assert identities.find_by_email("pat@example.com").id == user.id
        assert identities.find_by_email("nobody@example.com") is None

    def test_duplicate_email(self, identities):
        add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT)
        with pytest.raises(DuplicateEmailError):
            add_user(identities, "Other", "pat@example.com", UserRole.DOCTOR)

    def test_duplicate_email_racing_registration(self, identities, monkeypatch):
        """The unique index catches an address the lookup missed."""
        add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT)
        monkeypatch.setattr(identities, "find_by_email", lambda email: None)

        with pytest.raises(DuplicateEmailError):
            add_user(identities, "Other", "pat@example.com", UserRole.DOCTOR)

        monkeypatch.undo()
        other = add_user(identities, "Other", "other@example.com", UserRole.DOCTOR)
        assert identities.find_by_id(other.id).email == "other@example.com"

    def test_find_by_role(self, identities):
        add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT)
        add_user(identities, "Doc A", "a@example.com", UserRole.DOCTOR)
        add_user(identities, "Doc B", "b@example.com", UserRole.DOCTOR)

        doctors = identities.find_by_role(UserRole.DOCTOR)
        assert [d.name for d in doctors] == ["Doc A", "Doc B"]
        assert len(identities.find_all()) == 3

    def test_update_and_delete_missing(self, identities):
        with pytest.raises(RecordNotFoundError):
            identities.update(404, name="x")
        with pytest.raises(RecordNotFoundError):
            identities.delete(404)

    def test_delete_returns_record(self, identities):
        user = add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT)
        deleted = identities.delete(user.id)
        assert deleted.email == "pat@example.com"
        assert identities.find_by_id(user.id) is None

class TestAppointmentStore:

    @pytest.fixture
    def people(self, identities):
        return (
            add_user(identities, "Pat", "pat@example.com", UserRole.PATIENT),
            add_user(identities, "Doc", "doc@example.com", UserRole.DOCTOR),
        )

    def test_create_defaults(self, appointments, people):
        patient, doctor = people
        appointment = appointments.create(
            patient_id=patient.id, doctor_id=doctor.id,
            date=date(2024, 5, 1), time="10:00", reason="checkup",
        )

        assert appointment.status == "pending"
        assert appointment.created_at is not None

    def test_filter_and_join(self, appointments, people):
        patient, doctor = people
        appointments.create(patient_id=patient.id, doctor_id=doctor.id,
                            date=date(2024, 5, 1), time="10:00", reason="a")
        appointments.create(patient_id=patient.id, doctor_id=doctor.id,
                            date=date(2024, 5, 2), time="11:00", reason="b")

        found = appointments.find_by(join=("doctor",), patient_id=patient.id)
        assert [a.reason for a in found] == ["a", "b"]
        assert found[0].doctor.name == "Doc"
        assert appointments.find_by(doctor_id=patient.id) == []

    def test_update_keeps_created_at(self, appointments, people):
        patient, doctor = people
        appointment = appointments.create(patient_id=patient.id, doctor_id=doctor.id,
                                          date=date(2024, 5, 1), time="10:00", reason="a")
        created_at = appointment.created_at

        updated = appointments.update(appointment.id, status="confirmed")
        assert updated.status == "confirmed"
        assert updated.created_at == created_at

    def test_delete(self, appointments, people):
        patient, doctor = people
        appointment = appointments.create(patient_id=patient.id, doctor_id=doctor.id,
                                          date=date(2024, 5, 1), time="10:00", reason="a")
        appointments.delete(appointment.id)

        assert appointments.find_by_id(appointment.id) is None
        with pytest.raises(RecordNotFoundError):
            appointments.delete(appointment.id)

    def test_parties_are_not_constrained(self):
        """Deleting a user never trips over its appointments."""
        assert not Appointment.__table__.foreign_keys
