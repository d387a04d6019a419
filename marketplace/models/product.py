from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Float,
    Boolean,
    Text,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from datetime import datetime
from marketplace.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(
        Integer, ForeignKey("merchants.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=False, index=True)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    image = Column(String)
    category = Column(String, index=True)

    rating = Column(Float, default=0.0)
    prep_time = Column(Integer, default=0)
    available = Column(Boolean, default=True)
    featured = Column(Boolean, default=False)
    # JSON array of strings
    tags = Column(Text)
    status = Column(String, default="active", index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    merchant = relationship("Merchant", back_populates="products")

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, category={self.category})>"
