"""
Role model.
"""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import Base, TimestampMixin, generate_ulid


class Role(Base, TimestampMixin):
    """
    Role assigned to users by identifier.

    Examples: admin, manager, viewer
    """
    __tablename__ = "roles"
    
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    
    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name!r})>"
