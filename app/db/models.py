"""Database models."""
from datetime import datetime
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Restaurant(Base):
    """Restaurant directory entry."""

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    whatsapp_number = Column(String, unique=True, index=True, nullable=False)
    # SHA-256 hex digest of the dashboard token
    dashboard_token_hash = Column(String, unique=True, index=True, nullable=True)
    plan = Column(String, default="basic", nullable=False)
    is_cloud_kitchen = Column(Boolean, default=False, nullable=False)

    # Relationships
    menu_items = relationship("MenuItem", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")


class MenuItem(Base):
    """Menu item model."""

    __tablename__ = "menu_items"
    __table_args__ = (UniqueConstraint("restaurant_id", "item_no"),)

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    item_no = Column(Integer, nullable=False)
    item_name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="menu_items")


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    phone = Column(String, nullable=False)
    items = Column(JSON, nullable=False)  # Serialized cart lines
    status = Column(String, default="NEW", nullable=False)
    delivery_type = Column(String, nullable=False)  # delivery, pickup
    address_text = Column(Text, nullable=True)
    item_count = Column(Integer, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="orders")
