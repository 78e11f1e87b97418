"""
Shared fixtures: an in-memory SQLite database and an API client bound to it.
"""
from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture
def engine():
    from prelimpro.database import Base
    from prelimpro.models import db_models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db_session):
    from prelimpro.models.db_models import UserDB

    user = UserDB(
        id=str(uuid4()),
        email="crew@acme-framing.com",
        username="acme",
        password_hash=None,
        full_name="Dana Ruiz",
        company_name="Acme Framing LLC",
        company_address="500 Mill St, Sacramento, CA 95814",
        phone="(916) 555-0142",
        company_email="office@acme-framing.com",
        license_number="CSLB 1029384",
        created_at=datetime.utcnow(),
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from prelimpro.database import get_db
    from prelimpro.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan would connect to the configured database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    from prelimpro.auth import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}
