"""Shared fixtures: throwaway SQLite database, API client and spreadsheet builder."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from io import BytesIO
from typing import Dict, List

import pandas as pd
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models import User
from app.utils.auth_internal import create_access_token


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'stocklens_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def user(db_session):
    u = User(email="admin@example.com", username="Admin User")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def other_user(db_session):
    u = User(email="buyer@example.com", username="Buyer")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


def build_workbook(rows: List[Dict], columns: List[str] = None) -> bytes:
    """Write rows to an in-memory .xlsx (first sheet, header row = keys)."""
    buf = BytesIO()
    df = pd.DataFrame(rows, columns=columns)
    df.to_excel(buf, index=False, sheet_name="Data")
    return buf.getvalue()


@pytest.fixture
def widget_row():
    return {
        "ID": "P1",
        "Product Name": "Widget",
        "Opening Inventory": "10",
        "Procurement Qty (Day 1)": "5",
        "Procurement Price (Day 1)": "$2.00",
        "Sales Qty (Day 1)": "3",
        "Sales Price (Day 1)": "$4.00",
    }


@pytest.fixture
def three_day_rows():
    return [
        {
            "ID": "P1",
            "Product Name": "Widget",
            "Opening Inventory": 100,
            "Procurement Qty (Day 1)": 10, "Procurement Price (Day 1)": "$2.50",
            "Sales Qty (Day 1)": 4, "Sales Price (Day 1)": "$5.00",
            "Procurement Qty (Day 2)": 0, "Procurement Price (Day 2)": "",
            "Sales Qty (Day 2)": 0, "Sales Price (Day 2)": "",
            "Procurement Qty (Day 3)": 0, "Procurement Price (Day 3)": "",
            "Sales Qty (Day 3)": 20, "Sales Price (Day 3)": "$5.00",
        },
        {
            "ID": "P2",
            "Product Name": "Gadget",
            "Opening Inventory": 5,
            "Procurement Qty (Day 1)": 1, "Procurement Price (Day 1)": "$1,000.00",
            "Sales Qty (Day 1)": 0, "Sales Price (Day 1)": "",
            "Procurement Qty (Day 2)": 2, "Procurement Price (Day 2)": "$1,000.00",
            "Sales Qty (Day 2)": 3, "Sales Price (Day 2)": "$1,250.00",
            "Procurement Qty (Day 3)": 0, "Procurement Price (Day 3)": "",
            "Sales Qty (Day 3)": 1, "Sales Price (Day 3)": "$1,250.00",
        },
    ]


@pytest.fixture
def make_workbook():
    return build_workbook
