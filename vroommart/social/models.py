from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database.core import Base
import uuid
from datetime import datetime, timezone

# Edge tables. Each pair is unique so a repeated follow/like/bookmark can never
# produce a second row (and a second counter increment).

class Follow(Base):
    __tablename__ = "follows"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    follower_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    following_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    follower = relationship("User", foreign_keys=[follower_id], back_populates="following")
    following = relationship("User", foreign_keys=[following_id], back_populates="followers")

    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
    )

class VroomFollow(Base):
    __tablename__ = "vroom_follows"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vroom_id = Column(Uuid(as_uuid=True), ForeignKey("vrooms.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="vroom_follows")
    vroom = relationship("Vroom", back_populates="followers")

    __table_args__ = (
        UniqueConstraint("user_id", "vroom_id", name="uq_vroom_follows_pair"),
    )

class ProductLike(Base):
    __tablename__ = "product_likes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="product_likes")
    product = relationship("Product", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_product_likes_pair"),
    )

class ProductBookmark(Base):
    __tablename__ = "product_bookmarks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="product_bookmarks")
    product = relationship("Product", back_populates="bookmarks")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_product_bookmarks_pair"),
    )
