"""SQLAlchemy 2.0 ORM model for stored darts players."""

import uuid
from typing import Optional

from sqlalchemy import Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from darts_api.core.models import Base


class PlayerORM(Base):
    """A single stored player record.

    The table may hold several rows for the same player name; the query
    pipeline collapses them. ``row_id`` records insertion order and is the
    store iteration order used for first-wins deduplication.
    """

    __tablename__ = "players"

    # Insertion sequence; never exposed through the API
    row_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Insertion order of the record",
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        unique=True,
        index=True,
        nullable=False,
        default=uuid.uuid4,
        comment="Public player identifier assigned on creation",
    )

    name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        comment="Player name; used as the deduplication key",
    )

    country: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True, comment="Country the player represents"
    )

    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    date_of_birth: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Free-form date of birth"
    )

    nickname: Mapped[Optional[str]] = mapped_column(
        String(128), nullable=True, index=True
    )

    ranking: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, index=True, comment="Order of Merit ranking"
    )

    tour_card: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    career_earnings: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Display string; never used numerically"
    )

    def __repr__(self) -> str:
        """Return string representation of the player."""
        return f"<PlayerORM(id='{self.id}', name='{self.name}', ranking={self.ranking})>"
