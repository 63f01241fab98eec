from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Index

from app.database import Base


class PageVisit(Base):
    __tablename__ = "page_visits"

    id = Column(Integer, primary_key=True, index=True)

    path = Column(String, nullable=False, index=True)
    referrer = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)

    # Client generated, unauthenticated
    session_id = Column(String, nullable=False, index=True)

    # UTC, assigned by the server
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # mobile | tablet | desktop | unknown
    device_type = Column(String, nullable=False, index=True)

    language = Column(String, nullable=True)
    screen_resolution = Column(String, nullable=True)

    __table_args__ = (
        Index("ix_page_visits_path_timestamp", "path", "timestamp"),
    )
