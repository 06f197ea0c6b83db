"""SQLAlchemy ORM models for wishlists."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class WishlistModel(Base):
    """SQLAlchemy ORM model for wishlists table."""

    __tablename__ = "wishlists"

    id = Column(Uuid, primary_key=True)
    user_id = Column(Uuid, nullable=False, unique=True, index=True)
    is_public = Column(Boolean, nullable=False, default=False)
    share_token = Column(String(64), nullable=True, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    items = relationship(
        "WishlistItemModel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="WishlistItemModel.added_at",
    )


class WishlistItemModel(Base):
    """SQLAlchemy ORM model for wishlist_items table."""

    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("wishlist_id", "product_id"),)

    id = Column(Uuid, primary_key=True)
    wishlist_id = Column(Uuid, ForeignKey("wishlists.id"), nullable=False, index=True)
    product_id = Column(Uuid, nullable=False)
    note = Column(String(500), nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime, nullable=False, default=datetime.utcnow)
