from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import declarative_base
from uuid_extension import uuid7

Base = declarative_base()


def new_id() -> str:
    """Time-ordered UUIDv7, stored as its canonical string form."""
    return str(uuid7())


class BaseModel(Base):
    """Every table gets a UUIDv7 primary key plus created/updated timestamps."""

    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id})>"


# Models import Base from here, never the other way round.
# neropage.platform.db.models pulls every model in for create_all and alembic.
