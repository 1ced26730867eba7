"""
RefreshToken model: opaque refresh tokens issued at login.
Fields:
- token (primary key) - 64 hex chars, no embedded claims
- user_id (String(36)) - FK to users.id
- expires_at
- revoked_at (nullable) - set once by /revoke, never cleared
- created_at, updated_at
"""
from datetime import datetime

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, UTCDateTime, utcnow, as_utc


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
    expires_at = Column(UTCDateTime, nullable=False)
    revoked_at = Column(UTCDateTime, nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime) -> bool:
        return as_utc(now) >= as_utc(self.expires_at)

    def revoke(self, now: datetime) -> None:
        """Set revoked_at once; later calls keep the first timestamp."""
        if self.revoked_at is None:
            self.revoked_at = now

    def __repr__(self):
        # never print the token value
        return f"<RefreshToken user_id={self.user_id} revoked={self.is_revoked}>"
