from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from pydantic import BaseModel
from ..database.core import Base


class UserSession(Base):
    """Server-side login session. The access token's `jti` is the `sid`, so
    deleting the row revokes the token."""
    __tablename__ = "sessions"

    sid = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sess = Column(JSON, nullable=False, default=dict)  # identity-provider claims
    expire = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="sessions")

    __table_args__ = (
        Index("IDX_session_expire", "expire"),
    )


class TokenData(BaseModel):
    user_id: str | None = None
    session_id: str | None = None
