from sqlalchemy import Column, Integer, String, Numeric, Float, Boolean, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from marketplace.core.database import Base


class Merchant(Base):
    __tablename__ = "merchants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text)
    logo = Column(String)
    category = Column(String, index=True)

    rating = Column(Float, default=0.0)
    delivery_time = Column(String)
    min_order = Column(Numeric(10, 2), default=0)
    delivery_fee = Column(Numeric(10, 2), default=0)

    address = Column(String)
    city = Column(String)
    phone = Column(String)
    email = Column(String)

    # Priority partner
    is_dropx = Column(Boolean, default=False)
    # JSON object: day -> hours
    open_hours = Column(Text)
    status = Column(String, default="active", index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    products = relationship(
        "Product", back_populates="merchant", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Merchant(id={self.id}, name={self.name}, status={self.status})>"
