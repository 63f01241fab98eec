from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, Index

from app.database import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    featured_image = Column(String, nullable=True)
    gallery = Column(JSON, nullable=False, default=list)

    is_published = Column(Boolean, nullable=False, default=False)

    # Null while unpublished
    published_at = Column(DateTime, nullable=True)

    sort_order = Column(Integer, nullable=False, default=0, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # URL slug, unique across announcements
    slug = Column(String, nullable=True, unique=True, index=True)

    meta_description = Column(String, nullable=True)
    meta_keywords = Column(String, nullable=True)

    __table_args__ = (
        Index("ix_announcements_published", "is_published", "published_at"),
    )
