# vibe_commerce/data/models/cart_item.py
from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, func,
    CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.orm import relationship

from vibe_commerce.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    qty = Column(Integer, nullable=False)
    user_id = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product = relationship("ProductModel", back_populates="cart_items")

    __table_args__ = (
        # jedna linia na (user, produkt), upsert w CartRepo opiera sie na tym indeksie
        UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),
        CheckConstraint("qty > 0", name="ck_cart_items_qty_pos"),
        Index("ix_cart_items_user", "user_id"),
    )
