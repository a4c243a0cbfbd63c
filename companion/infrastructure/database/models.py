"""SQLAlchemy ORM models -- remote record store schema.

Two logical tables: the read-only champion catalog and the per-user
roster that links to it by catalog id.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, SmallInteger, DateTime, Text, ForeignKey
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow():
    return datetime.now(timezone.utc)


def _new_uuid():
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Champion catalog (read-only for the client)
# ---------------------------------------------------------------------------

class ChampionModel(Base):
    __tablename__ = "champions"

    id = Column(String(36), primary_key=True, default=_new_uuid)
    name = Column(String(80), nullable=False, index=True)
    faction = Column(String(40), nullable=False)
    type = Column(String(20), nullable=True)
    affinity = Column(String(20), nullable=True)
    rarity = Column(String(20), nullable=False)
    image_url = Column(Text, nullable=True)


# ---------------------------------------------------------------------------
# Roster links (one row per tracked champion)
# ---------------------------------------------------------------------------

class UserChampionModel(Base):
    __tablename__ = "user_champions"

    id = Column(String(36), primary_key=True, default=_new_uuid)
    # Upserts are keyed on this column
    champion_id = Column(String(36), ForeignKey("champions.id"), unique=True, nullable=False, index=True)
    level = Column(Integer, nullable=False, default=1)
    ascension_level = Column(SmallInteger, nullable=False, default=0)
    soul_level = Column(SmallInteger, nullable=False, default=0)
    rarity = Column(String(20), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=True, default=_utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    champion = relationship("ChampionModel", lazy="select")
