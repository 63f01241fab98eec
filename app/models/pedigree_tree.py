from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from app.database import Base


class PedigreeTree(Base):
    __tablename__ = "pedigree_trees"

    id = Column(Integer, primary_key=True)

    root_cat_id = Column(
        String,
        ForeignKey("cats.id"),
        nullable=False,
        index=True,
    )

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")

    # Serialized ancestor tree (see app.core.pedigree.serialize_tree)
    tree_data = Column(Text, nullable=False)

    # Generations captured when the snapshot was built
    depth = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
