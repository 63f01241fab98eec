from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Index,
)

from app.database import Base


class PedigreeConnection(Base):
    """
    Directed parent -> child edge between two cats.
    A child should carry at most one mother and one father edge;
    storage does not enforce it.
    """

    __tablename__ = "pedigree_connections"

    id = Column(Integer, primary_key=True, index=True)

    parent_id = Column(
        String,
        ForeignKey("cats.id"),
        nullable=False,
        index=True,
    )
    child_id = Column(
        String,
        ForeignKey("cats.id"),
        nullable=False,
        index=True,
    )

    # mother | father
    type = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "parent_id != child_id",
            name="ck_pedigree_connections_not_self",
        ),
        Index(
            "ix_pedigree_connections_child_type",
            "child_id",
            "type",
        ),
    )
