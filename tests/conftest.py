"""
Configuração do pytest: banco SQLite em memória compartilhado e TestClient.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.database import Base, get_db, HOUSEHOLD_ID
from models.fridge_layout import FridgeLayout
from models.wine import Wine, WineStatus
from services.undo_service import undo_registry


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_undo_history():
    undo_registry.clear()
    yield
    undo_registry.clear()


@pytest.fixture
def make_layout(db):
    """Cria adega direto no banco (sem validação de limites)"""

    def _make(shelves=6, columns=5, name="Adega"):
        layout = FridgeLayout(household_id=HOUSEHOLD_ID, name=name, shelves=shelves, columns=columns)
        db.add(layout)
        db.commit()
        db.refresh(layout)
        return layout

    return _make


@pytest.fixture
def make_wine(db):
    def _make(producer="Ridge", **fields):
        fields.setdefault("status", WineStatus.CELLARED)
        wine = Wine(household_id=HOUSEHOLD_ID, producer=producer, **fields)
        db.add(wine)
        db.commit()
        db.refresh(wine)
        return wine

    return _make
