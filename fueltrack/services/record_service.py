"""
Record store operations.

The store is a read-all/write-all collection of FuelRecords kept in the
fuel_records table. Records are replaced as a whole, keyed on id; derived
values are never stored.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import DatabaseError, RecordNotFoundError
from ..models import FuelRecord, FuelRecordRow
from ..utils.wide_events import track_operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    imported: List[FuelRecord]
    skipped: int
    total: int

    def to_dict(self):
        return {
            "imported": len(self.imported),
            "skipped": self.skipped,
            "total": self.total,
        }


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise DatabaseError(f"Failed to {action}", {"error": str(e)}) from e


def _next_position(db: Session) -> int:
    current = db.query(func.max(FuelRecordRow.position)).scalar()
    return 0 if current is None else current + 1


def load_records(db: Session) -> List[FuelRecord]:
    """Read the whole record set in insertion order."""
    try:
        rows = db.query(FuelRecordRow).order_by(FuelRecordRow.position).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load fuel records: {e}")
        raise DatabaseError("Failed to load fuel records", {"error": str(e)}) from e
    return [row.to_record() for row in rows]


def count_records(db: Session) -> int:
    return db.query(func.count(FuelRecordRow.id)).scalar() or 0


def get_record(db: Session, record_id: str) -> FuelRecord:
    row = db.get(FuelRecordRow, record_id)
    if row is None:
        raise RecordNotFoundError(f"Fuel record {record_id} not found", record_id=record_id)
    return row.to_record()


def save_record(db: Session, record: FuelRecord) -> Tuple[FuelRecord, bool]:
    """
    Insert a new record or fully replace the one with the same id.

    Returns:
        (record, created) where created is False for a replacement
    """
    row = db.get(FuelRecordRow, record.id)
    created = row is None

    if created:
        db.add(FuelRecordRow.from_record(record, _next_position(db)))
    else:
        row.apply(record)

    _commit(db, f"save fuel record {record.id}")
    logger.info(f"{'Created' if created else 'Updated'} fuel record {record.id} ({record.date.isoformat()})")
    return record, created


def update_record(db: Session, record: FuelRecord) -> FuelRecord:
    """Replace an existing record; unknown ids are an error, not an insert."""
    if db.get(FuelRecordRow, record.id) is None:
        raise RecordNotFoundError(f"Fuel record {record.id} not found", record_id=record.id)
    saved, _ = save_record(db, record)
    return saved


def delete_record(db: Session, record_id: str) -> None:
    row = db.get(FuelRecordRow, record_id)
    if row is None:
        raise RecordNotFoundError(f"Fuel record {record_id} not found", record_id=record_id)

    db.delete(row)
    _commit(db, f"delete fuel record {record_id}")
    logger.info(f"Deleted fuel record {record_id}")


def replace_all(db: Session, records: Iterable[FuelRecord]) -> None:
    """Overwrite the store with records, keeping their order."""
    db.query(FuelRecordRow).delete()
    for position, record in enumerate(records):
        db.add(FuelRecordRow.from_record(record, position))
    _commit(db, "replace fuel records")


def merge_imported(
    existing: Iterable[FuelRecord],
    imported: Iterable[FuelRecord],
) -> Tuple[List[FuelRecord], List[FuelRecord]]:
    """
    Merge an import into the existing record list.

    Records whose id is not already present are appended in payload order.
    Existing records are never overwritten: on an id collision the stored
    record wins. Repeated ids inside the payload keep their first occurrence.

    Returns:
        (merged, added)
    """
    merged = list(existing)
    known_ids = {r.id for r in merged}
    added = []

    for record in imported:
        if record.id in known_ids:
            continue
        known_ids.add(record.id)
        added.append(record)

    merged.extend(added)
    return merged, added


def import_records(db: Session, imported: List[FuelRecord], payload_hash: Optional[str] = None) -> ImportResult:
    """Apply the import merge policy against the store."""
    with track_operation("records_import", payload_size=len(imported), payload_hash=payload_hash) as event:
        existing = load_records(db)
        merged, added = merge_imported(existing, imported)

        next_position = _next_position(db)
        for offset, record in enumerate(added):
            db.add(FuelRecordRow.from_record(record, next_position + offset))
        with event.timer("db_write"):
            _commit(db, "import fuel records")

        result = ImportResult(imported=added, skipped=len(imported) - len(added), total=len(merged))
        event.add_business_metric("imported", len(added))
        event.add_business_metric("skipped", result.skipped)
        event.add_business_metric("total", result.total)

    logger.info(f"Imported {len(added)} fuel records ({result.skipped} skipped, {result.total} total)")
    return result


def _format_odometer(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def search_records(records: Iterable[FuelRecord], term: Optional[str] = None) -> List[FuelRecord]:
    """
    History listing: newest first, optionally filtered by a search term.

    A record matches when its ISO date contains the term, its notes contain
    it (case-insensitive), or its odometer reading contains it.
    """
    newest_first = sorted(records, key=lambda r: r.date, reverse=True)
    if not term:
        return newest_first

    needle = term.lower()
    return [
        r for r in newest_first
        if needle in r.date.isoformat()
        or needle in (r.notes or '').lower()
        or needle in _format_odometer(r.odometer)
    ]
