from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from login_attempts.models.base import Base, UUIDPrimaryKeyMixin


class Attempt(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "attempts"

    address: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_attempts_address_action", "address", "action"),
    )

    def __repr__(self) -> str:
        return f"<Attempt {self.address} {self.action} until {self.expires_at}>"
