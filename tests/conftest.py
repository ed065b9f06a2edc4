"""
Pytest fixtures for FuelTrack tests.
"""

import os
import sys
from datetime import date

import pytest

# Make factories importable from test modules
sys.path.insert(0, os.path.dirname(__file__))

os.environ.setdefault('LOG_LEVEL', 'WARNING')

from fueltrack.app import create_app
from fueltrack.database import SessionLocal
from fueltrack.models import Base
from fueltrack.services import record_service

from factories import FuelRecordFactory


@pytest.fixture
def app():
    """Create application backed by a fresh in-memory database."""
    flask_app = create_app({
        'TESTING': True,
        'DATABASE_URL': 'sqlite:///:memory:',
        'DEFAULT_LANGUAGE': 'en',
    })

    yield flask_app

    # Clean up tables after test
    engine = flask_app.extensions['fueltrack_engine']
    SessionLocal.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Provide a database session for tests."""
    session = SessionLocal()
    yield session
    session.rollback()
    SessionLocal.remove()


@pytest.fixture
def two_fills():
    """The reference two-record history: 300 distance on 12 gallons."""
    return [
        FuelRecordFactory.create(id="a", date=date(2024, 1, 1), odometer=1000, gallons=10,
                                 price_per_gallon=3.00, total_cost=30.00),
        FuelRecordFactory.create(id="b", date=date(2024, 1, 15), odometer=1300, gallons=12,
                                 price_per_gallon=3.20, total_cost=38.40),
    ]


@pytest.fixture
def stored_fills(db_session, two_fills):
    """The reference history saved to the store."""
    record_service.replace_all(db_session, two_fills)
    return two_fills
