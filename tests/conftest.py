import os

os.environ["TESTING"] = "1"

import pytest
from fastapi.testclient import TestClient

from booking_api.core import security
from booking_api.core.config import Settings
from booking_api.main import create_app

# Cheap hashes keep the suite fast; verification logic is unchanged
security.pwd_context.update(bcrypt__rounds=4)

PASSWORD = "TestPassword123"

@pytest.fixture
def settings(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'test.db'}"
    return Settings(
        DATABASE_URL=db_url,
        TEST_DATABASE_URL=db_url,
        SECRET_KEY="test-secret-key",
        TESTING=True,
    )

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

@pytest.fixture
def db(app):
    database = app.state.database
    database.init_db()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.drop_db()

def register(client, name, email, role, password=PASSWORD, gender=None):
    response = client.post("/user/register", json={
        "name": name,
        "email": email,
        "password": password,
        "role": role,
        "gender": gender,
    })
    assert response.status_code == 201, response.text
    return response.json()["user"]

def login(client, email, password=PASSWORD):
    response = client.post("/user/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]

def auth(token):
    return {"token": f"Bearer {token}"}

class Party:
    """A registered user together with a ready-made auth header."""

    def __init__(self, client, name, email, role):
        self.user = register(client, name, email, role)
        self.id = self.user["id"]
        self.token = login(client, email)
        self.headers = auth(self.token)

@pytest.fixture
def parties(client):
    return {
        "p1": Party(client, "Pat One", "p1@example.com", "patient"),
        "p2": Party(client, "Pat Two", "p2@example.com", "patient"),
        "d1": Party(client, "Doc One", "d1@example.com", "doctor"),
        "d2": Party(client, "Doc Two", "d2@example.com", "doctor"),
        "admin": Party(client, "Ada Admin", "admin@example.com", "admin"),
    }

def book(client, patient, doctor_id, **overrides):
    payload = {
        "doctorId": doctor_id,
        "date": "2024-05-01",
        "time": "10:00",
        "reason": "checkup",
    }
    payload.update(overrides)
    return client.post("/appointment/", json=payload, headers=patient.headers)

@pytest.fixture
def appointment(client, parties):
    response = book(client, parties["p1"], parties["d1"].id)
    assert response.status_code == 201, response.text
    return response.json()["appointment"]
