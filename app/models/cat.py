import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, Index

from app.database import Base


class Cat(Base):
    __tablename__ = "cats"

    # Opaque handle shared with the frontend
    id = Column(
        String,
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )

    name = Column(String, nullable=False)
    subtitle = Column(String, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")

    # Free text ("2 years", "8 weeks")
    age = Column(String, nullable=False, default="")
    color = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="")

    # Ordered list of image URLs
    gallery = Column(JSON, nullable=False, default=list)

    # male | female
    gender = Column(String, nullable=False, index=True)
    birth_date = Column(String, nullable=False, default="")

    registration_number = Column(String, nullable=True, index=True)

    # Visible on the public site
    is_displayed = Column(Boolean, nullable=False, default=True, index=True)

    free_text = Column(Text, nullable=True)

    # Admin only, never shown publicly
    internal_notes = Column(Text, nullable=True)

    # kitten | adult | all (UI bucket, independent of birth date)
    category = Column(String, nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_cats_category_displayed", "category", "is_displayed"),
    )
