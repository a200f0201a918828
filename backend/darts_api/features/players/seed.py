"""Seed import for the player catalog.

Replaces the stored players with the contents of a JSON file. Records are
inserted in file order, duplicates included; the query pipeline is what
collapses them.
"""

import json
from pathlib import Path
from typing import Any, Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from .orm_models import PlayerORM

logger = structlog.get_logger(__name__)

# JSON key -> column name
SEED_FIELD_MAP = {
    "name": "name",
    "country": "country",
    "age": "age",
    "dateOfBirth": "date_of_birth",
    "nickname": "nickname",
    "ranking": "ranking",
    "tourCard": "tour_card",
    "careerEarnings": "career_earnings",
}

INTEGER_FIELDS = {"age", "ranking"}


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def _coerce_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _column_length(column: str) -> Optional[int]:
    return getattr(PlayerORM.__table__.c[column].type, "length", None)


def normalize_seed_record(raw: Any) -> dict[str, Any]:
    """Map a raw seed entry to ORM column values.

    Integer fields that cannot be read as whole numbers become ``None``;
    everything else is kept as a string.

    :raises ValueError: If the entry is not an object, has no player name,
        or holds a string longer than its column allows
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Seed record is not an object: {raw!r}")

    record: dict[str, Any] = {}
    for key, column in SEED_FIELD_MAP.items():
        value = raw.get(key)
        if column in INTEGER_FIELDS:
            record[column] = _coerce_int(value)
            continue

        text = _coerce_str(value)
        max_length = _column_length(column)
        if text is not None and max_length is not None and len(text) > max_length:
            raise ValueError(f"Seed field {key} exceeds {max_length} characters")
        record[column] = text

    if not record["name"]:
        raise ValueError(f"Seed record has no name: {raw!r}")
    return record


def load_seed_records(path: Path) -> list[dict[str, Any]]:
    """Read the raw seed entries from a JSON array file."""
    with Path(path).open(encoding="utf-8") as handle:
        data = json.load(handle)

    if not isinstance(data, list):
        raise ValueError(f"Seed file must contain a JSON array: {path}")
    return data


async def seed_players(db: AsyncSession, records: list[dict[str, Any]]) -> int:
    """Replace all stored players with the given raw records.

    Entries without a name are skipped with a warning.

    :param db: Async database session
    :param records: Raw seed entries in the order they should be stored
    :returns: Number of players inserted
    """
    players = []
    for index, raw in enumerate(records):
        try:
            players.append(PlayerORM(**normalize_seed_record(raw)))
        except ValueError as e:
            logger.warning("seed_record_skipped", index=index, reason=str(e))

    await db.execute(delete(PlayerORM))
    db.add_all(players)
    await db.commit()

    logger.info("players_seeded", inserted=len(players), skipped=len(records) - len(players))

    return len(players)
