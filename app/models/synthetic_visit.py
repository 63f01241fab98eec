from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime

from app.database import Base


class SyntheticVisit(Base):
    __tablename__ = "synthetic_visits"

    id = Column(Integer, primary_key=True)

    # YYYY-MM-DD, one row per day
    date = Column(String, nullable=False, unique=True, index=True)

    count = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
