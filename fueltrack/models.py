import math
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .utils.time_utils import format_date_iso, parse_date


Base = declarative_base()

NUMERIC_FIELDS = (
    ('odometer', 'odometer'),
    ('gallons', 'gallons'),
    ('price_per_gallon', 'pricePerGallon'),
    ('total_cost', 'totalCost'),
)


class RecordFieldError(ValueError):
    """A fuel record payload has an unusable value in one field."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


def _to_float(value: Any) -> float:
    """Coerce a payload number, falling back to 0.0 like a blank form field."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class FuelRecord:
    """One logged refueling event. Replaced as a whole, never mutated."""

    id: str
    date: date
    odometer: float
    gallons: float
    price_per_gallon: float
    total_cost: float
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FuelRecord":
        """
        Build a record from its JSON form.

        Missing or non-numeric amounts become 0.0; NaN and infinity are
        rejected since they cannot be stored or serialized.

        Raises:
            RecordFieldError: if the id is missing, the date cannot be parsed
                or an amount is not finite
        """
        record_id = data.get('id')
        if record_id is None or str(record_id).strip() == '':
            raise RecordFieldError("Fuel record is missing an id", 'id')

        record_date = parse_date(data.get('date'))
        if record_date is None:
            raise RecordFieldError(
                f"Fuel record {record_id} has an invalid date: {data.get('date')!r}", 'date'
            )

        amounts = {}
        for attribute, key in NUMERIC_FIELDS:
            value = _to_float(data.get(key))
            if not math.isfinite(value):
                raise RecordFieldError(f"Fuel record {record_id} has a non-finite {key}: {value}", key)
            amounts[attribute] = value

        return cls(
            id=str(record_id),
            date=record_date,
            notes=data.get('notes') or '',
            **amounts,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'date': format_date_iso(self.date),
            'odometer': self.odometer,
            'gallons': self.gallons,
            'pricePerGallon': self.price_per_gallon,
            'totalCost': self.total_cost,
            'notes': self.notes,
        }

    def with_id(self, record_id: str) -> "FuelRecord":
        return replace(self, id=record_id)


class FuelRecordRow(Base):
    """Stored refueling record. position keeps insertion order for stable ties."""

    __tablename__ = 'fuel_records'

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    odometer = Column(Float, nullable=False)
    gallons = Column(Float, nullable=False)
    price_per_gallon = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_record(cls, record: FuelRecord, position: int) -> "FuelRecordRow":
        return cls(
            id=record.id,
            position=position,
            date=record.date,
            odometer=record.odometer,
            gallons=record.gallons,
            price_per_gallon=record.price_per_gallon,
            total_cost=record.total_cost,
            notes=record.notes,
        )

    def apply(self, record: FuelRecord) -> None:
        """Overwrite every field with record (full replacement, position kept)."""
        self.date = record.date
        self.odometer = record.odometer
        self.gallons = record.gallons
        self.price_per_gallon = record.price_per_gallon
        self.total_cost = record.total_cost
        self.notes = record.notes

    def to_record(self) -> FuelRecord:
        return FuelRecord(
            id=self.id,
            date=self.date,
            odometer=self.odometer,
            gallons=self.gallons,
            price_per_gallon=self.price_per_gallon,
            total_cost=self.total_cost,
            notes=self.notes or '',
        )

    def to_dict(self):
        return self.to_record().to_dict()


def get_engine(database_url):
    """Create database engine."""
    if database_url.startswith('sqlite') and ':memory:' in database_url:
        # Share one connection so every session sees the same in-memory database
        return create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)
