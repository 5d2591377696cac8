from sqlalchemy import Column, String, Text, Integer, DateTime
from sqlalchemy.orm import relationship
from ..database.core import Base
from datetime import datetime, timezone


class User(Base):
    """
    SQLAlchemy model representing a user in the database.

    The primary key is the subject claim issued by the identity provider,
    so it is stored as an opaque string rather than a generated UUID.
    """
    __tablename__ = 'users'

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    username = Column(String, unique=True, nullable=True, index=True)
    bio = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    website = Column(String, nullable=True)
    # Recomputed from the follows table on every follow/unfollow
    followers_count = Column(Integer, nullable=False, default=0)
    following_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Everything a user owns or takes part in goes away with the user
    products = relationship("Product", back_populates="user", cascade="all")
    vrooms = relationship("Vroom", back_populates="user", cascade="all")
    followers = relationship("Follow", foreign_keys="Follow.following_id", back_populates="following", cascade="all")
    following = relationship("Follow", foreign_keys="Follow.follower_id", back_populates="follower", cascade="all")
    vroom_follows = relationship("VroomFollow", back_populates="user", cascade="all")
    product_likes = relationship("ProductLike", back_populates="user", cascade="all")
    product_bookmarks = relationship("ProductBookmark", back_populates="user", cascade="all")
    comments = relationship("Comment", back_populates="user", cascade="all")
    cart_items = relationship("CartItem", back_populates="user", cascade="all")
    orders_as_buyer = relationship("Order", foreign_keys="Order.buyer_id", back_populates="buyer", cascade="all")
    orders_as_seller = relationship("Order", foreign_keys="Order.seller_id", back_populates="seller", cascade="all")
    sent_messages = relationship("Message", foreign_keys="Message.sender_id", back_populates="sender", cascade="all")
    received_messages = relationship("Message", foreign_keys="Message.receiver_id", back_populates="receiver", cascade="all")
    sessions = relationship("UserSession", back_populates="user", cascade="all")

    def __repr__(self):
        """String representation of the User object."""
        return f"<User(id='{self.id}', username='{self.username}', email='{self.email}')>"
