from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from marketplace.core.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    merchant_id = Column(Integer, ForeignKey("merchants.id", ondelete="SET NULL"))
    order_number = Column(String, unique=True, index=True)
    status = Column(String, default="pending", index=True)
    total_amount = Column(Numeric(12, 2), default=0)

    # Opaque line-item payload, passed through as stored
    items = Column(Text)
    delivery_address = Column(String)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="orders")
    merchant = relationship("Merchant")

    def __repr__(self):
        return f"<Order(id={self.id}, order_number={self.order_number}, status={self.status})>"
