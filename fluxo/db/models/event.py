from sqlalchemy import Column, String, Text, DateTime, Index
from fluxo.db.session import Base
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"
    id = Column(String(128), primary_key=True)
    organizer_id = Column(String(128), nullable=True)
    title = Column(String(255), nullable=False)
    date = Column(String(64), nullable=False)
    time = Column(String(64), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=False)
    registration_link = Column(String(1024), nullable=False)
    map_embed_url = Column(Text, nullable=True)
    sheet_link = Column(String(1024), nullable=True)
    # Set client-side with microseconds so listing keeps creation order
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index('idx_event_organizer', 'organizer_id'),
        Index('idx_event_created_at', 'created_at'),
    )
