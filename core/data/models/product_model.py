"""SQLAlchemy ORM models for the Product aggregate."""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import Base


class ProductModel(Base):
    """SQLAlchemy ORM model for products table."""

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True)
    sku = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(300), nullable=False, unique=True, index=True)
    short_description = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(12, 2), nullable=False)
    compare_at_price = Column(Numeric(12, 2), nullable=True)
    cost_price = Column(Numeric(12, 2), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    brand = Column(String(100), nullable=True, index=True)
    model = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    requires_installation = Column(Boolean, nullable=False, default=False)
    warranty_months = Column(Integer, nullable=False, default=12)
    weight_kg = Column(Numeric(10, 3), nullable=True)
    meta_title = Column(String(200), nullable=True)
    meta_description = Column(String(500), nullable=True)
    specifications = Column(JSON, nullable=False, default=dict)
    features = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    # Children are always loaded with the product (async sessions cannot lazy load)
    variants = relationship(
        "ProductVariantModel",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ProductVariantModel.sort_order",
    )
    tags = relationship(
        "ProductTagModel", cascade="all, delete-orphan", lazy="selectin"
    )
    translations = relationship(
        "ProductTranslationModel", cascade="all, delete-orphan", lazy="selectin"
    )


class ProductVariantModel(Base):
    """SQLAlchemy ORM model for product_variants table."""

    __tablename__ = "product_variants"

    id = Column(Uuid, primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False, index=True)
    sku = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    price_adjustment = Column(Numeric(12, 2), nullable=False, default=0)
    attributes = Column(JSON, nullable=False, default=dict)
    stock_quantity = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=5)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="variants")


class ProductTagModel(Base):
    """One normalised tag of a product."""

    __tablename__ = "product_tags"

    product_id = Column(Uuid, ForeignKey("products.id"), primary_key=True)
    tag = Column(String(100), primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)


class ProductTranslationModel(Base):
    """SQLAlchemy ORM model for product_translations table."""

    __tablename__ = "product_translations"
    __table_args__ = (UniqueConstraint("product_id", "language_code"),)

    id = Column(Uuid, primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False, index=True)
    language_code = Column(String(2), nullable=False)
    name = Column(String(255), nullable=False)
    short_description = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    meta_title = Column(String(200), nullable=True)
    meta_description = Column(String(500), nullable=True)


class PriceHistoryModel(Base):
    """SQLAlchemy ORM model for product_price_history table."""

    __tablename__ = "product_price_history"

    id = Column(Uuid, primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=False)
    compare_at_price = Column(Numeric(12, 2), nullable=True)
    reason = Column(String(30), nullable=False)
    notes = Column(String(500), nullable=True)
    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
