from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from ..database.core import Base
import uuid
from datetime import datetime, timezone

ORDER_STATUSES = ("pending", "confirmed", "shipped", "delivered", "cancelled")

class Order(Base):
    __tablename__ = "orders"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    buyer_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Denormalized from the product's owner when the order is placed
    seller_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, confirmed, shipped, delivered, cancelled
    payment_method = Column(String, nullable=False, default="pay_on_delivery")
    shipping_address = Column(JSON, nullable=True)  # {country, town, street, details}
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    buyer = relationship("User", foreign_keys=[buyer_id], back_populates="orders_as_buyer")
    seller = relationship("User", foreign_keys=[seller_id], back_populates="orders_as_seller")
    product = relationship("Product", back_populates="orders")
    messages = relationship("Message", back_populates="order", cascade="all")
