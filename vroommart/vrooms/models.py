from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from ..database.core import Base
import uuid
from datetime import datetime, timezone

class Vroom(Base):
    """A user's storefront. Its products are not stored here: they are the
    owner's available products, looked up at read time."""
    __tablename__ = "vrooms"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    banner_image_url = Column(String, nullable=True)
    followers_count = Column(Integer, nullable=False, default=0)
    views_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="vrooms")
    followers = relationship("VroomFollow", back_populates="vroom", cascade="all")
