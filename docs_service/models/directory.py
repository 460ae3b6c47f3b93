"""Directory model."""

from sqlalchemy import Column, Index, Integer, String, DateTime
from sqlalchemy.sql import func
from ..database import Base


class Directory(Base):
    """A node in a project's directory forest.

    ``parent_id = 0`` marks a root directory. There is no foreign key on
    ``parent_id`` because 0 never names a row.
    """

    __tablename__ = "directories"
    __table_args__ = (
        Index("ix_directories_project_parent", "project_id", "parent_id"),
        Index("ix_directories_parent_id", "parent_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, nullable=False)
    parent_id = Column(Integer, nullable=False, default=0)
    owner_id = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    sort_code = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
