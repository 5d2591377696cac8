from sqlalchemy import Column, String, Text, Integer, Boolean, Numeric, DateTime, ForeignKey, JSON, Uuid, Index
from sqlalchemy.orm import relationship
from ..database.core import Base
import uuid
from datetime import datetime, timezone

class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String, nullable=True)
    image_urls = Column(JSON, nullable=False, default=list)
    # Normalized tags (lower-case, no leading '#'), stored as a JSON array
    hashtags = Column(JSON, nullable=False, default=list)
    category = Column(String, nullable=True)
    stock = Column(Integer, nullable=False, default=1)
    is_available = Column(Boolean, nullable=False, default=True)
    # Denormalized counters, adjusted by the like/share/comment/view operations
    likes_count = Column(Integer, nullable=False, default=0)
    shares_count = Column(Integer, nullable=False, default=0)
    comments_count = Column(Integer, nullable=False, default=0)
    views_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="products")
    likes = relationship("ProductLike", back_populates="product", cascade="all")
    bookmarks = relationship("ProductBookmark", back_populates="product", cascade="all")
    comments = relationship("Comment", back_populates="product", cascade="all")
    cart_items = relationship("CartItem", back_populates="product", cascade="all")
    orders = relationship("Order", back_populates="product", cascade="all")

    __table_args__ = (
        Index("ix_products_feed", "is_available", "created_at"),
    )

    def __repr__(self):
        return f"<Product(id='{self.id}', title='{self.title}')>"
