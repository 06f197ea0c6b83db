"""SQLAlchemy ORM model for customer addresses."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Index, String, Uuid

from .base import Base


class AddressModel(Base):
    """SQLAlchemy ORM model for addresses table."""

    __tablename__ = "addresses"
    __table_args__ = (Index("ix_addresses_user_default", "user_id", "is_default"),)

    id = Column(Uuid, primary_key=True)
    user_id = Column(Uuid, nullable=False, index=True)
    full_name = Column(String(100), nullable=False)
    address_line1 = Column(String(200), nullable=False)
    address_line2 = Column(String(200), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)
    country_code = Column(String(3), nullable=False)
    phone = Column(String(30), nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    type = Column(String(20), nullable=False, default="Shipping")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)
