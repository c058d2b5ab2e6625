"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from solvability_gateway.api.main import create_app
from solvability_gateway.infrastructure.database.models import Base
from solvability_gateway.infrastructure.database.session import engine_options, get_db
from solvability_gateway.domain.models import (
    DocumentsProvided,
    EmploymentType,
    RentHistory,
    TenantScoreInput,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


ALL_DOCUMENTS = DocumentsProvided(
    identity=True,
    income_proof=True,
    tax_notice=True,
    employment_contract=True,
    rent_receipts=True,
)


@pytest.fixture
def strong_tenant() -> TenantScoreInput:
    """CDI applicant earning exactly 3x rent + charges with a complete file"""
    return TenantScoreInput(
        first_name="Camille",
        last_name="Martin",
        monthly_income=3000.0,
        rent_amount=900.0,
        charges_amount=100.0,
        employment_type=EmploymentType.PERMANENT_CONTRACT,
        documents_provided=ALL_DOCUMENTS,
        previous_rent_history=RentHistory.GOOD,
    )


@pytest.fixture
def strong_tenant_payload() -> dict:
    """Same profile as strong_tenant, as sent over HTTP"""
    return {
        "first_name": "Camille",
        "last_name": "Martin",
        "monthly_income": 3000,
        "rent_amount": 900,
        "charges_amount": 100,
        "employment_type": "permanent-contract",
        "documents_provided": {
            "identity": True,
            "income_proof": True,
            "tax_notice": True,
            "employment_contract": True,
            "rent_receipts": True,
        },
        "previous_rent_history": "good",
    }
