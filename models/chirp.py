from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    # Stored after moderation; length is validated on the raw input
    body = Column(String(255), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    author = relationship("User", back_populates="chirps")

    __table_args__ = (
        Index("ix_chirps_user_id", "user_id"),
        Index("ix_chirps_created_at", "created_at"),
    )
