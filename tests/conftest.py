import pytest
from fastapi.testclient import TestClient

from database import InMemoryDatabase
from ledger import TurfLedger
from main import create_app
from seed import seed

DATE = "2025-08-01"


@pytest.fixture
def db():
    db = InMemoryDatabase()
    db.create_document(
        "turf",
        {
            "id": "T1",
            "name": "Test Turf",
            "location": "1 Test Rd",
            "pricePerHour": 1000,
            "availableHours": ["09:00", "10:00"],
            "description": "Two slots only",
        },
    )
    db.create_document(
        "user",
        {"id": "u1", "name": "Player", "email": "a@x.com", "contactNo": "111", "dob": "01/01/1990", "role": "player"},
    )
    db.create_document(
        "user",
        {"id": "admin1", "name": "Owner", "email": "admin@x.com", "contactNo": "999", "dob": "01/01/1980", "role": "admin"},
    )
    return db


@pytest.fixture
def ledger(db):
    return TurfLedger(db)


@pytest.fixture
def seeded_ledger():
    return TurfLedger(seed(InMemoryDatabase()))


@pytest.fixture
def client(ledger):
    with TestClient(create_app(ledger)) as c:
        yield c
