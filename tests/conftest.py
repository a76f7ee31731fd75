import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from golfpot.main import app
from golfpot.runtime import get_settlement_service
from golfpot.service import SettlementService
from golfpot.storage import models  # noqa: F401
from golfpot.storage.database import Base
from golfpot.storage.repository import SettlementRepository


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    engine.dispose()


@pytest.fixture
def service(session_factory) -> SettlementService:
    return SettlementService(SettlementRepository(session_factory))


@pytest.fixture
def client(service: SettlementService):
    app.dependency_overrides[get_settlement_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
