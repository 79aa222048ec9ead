"""
User model with ULID primary keys.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin, generate_ulid


class User(Base, TimestampMixin):
    """
    User account in the directory.
    
    Uses ULID instead of auto-incrementing integers so ids are never guessable.
    Owns its permissions; only references its role.
    """
    __tablename__ = "users"
    
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    
    # User information
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    
    # Weak reference to roles.id: no FK constraint, an unknown id is stored
    # as given and resolves to no role
    role_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    
    # Relationships
    role: Mapped["Role"] = relationship(  # type: ignore
        "Role",
        primaryjoin="foreign(User.role_id) == Role.id",
        viewonly=True,
        lazy="selectin"
    )
    
    permissions: Mapped[list["Permission"]] = relationship(  # type: ignore
        "Permission",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Permission.id",
        lazy="selectin"
    )
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
