"""SQLAlchemy ORM models for shopping carts."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class CartModel(Base):
    """SQLAlchemy ORM model for carts table."""

    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True)
    user_id = Column(Uuid, nullable=True, index=True)
    session_id = Column(String(100), nullable=True, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CartItemModel.created_at",
    )


class CartItemModel(Base):
    """SQLAlchemy ORM model for cart_items table."""

    __tablename__ = "cart_items"

    id = Column(Uuid, primary_key=True)
    cart_id = Column(Uuid, ForeignKey("carts.id"), nullable=False, index=True)
    product_id = Column(Uuid, nullable=False)
    variant_id = Column(Uuid, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    cart = relationship("CartModel", back_populates="items")
