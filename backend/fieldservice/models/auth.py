"""
Authentication models for user management.
"""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func

from fieldservice.core.database import Base


class User(Base):
    """User model for authentication; the creator side of a service request."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<User(email={self.email})>"
