# File: marketplace/models/offer.py

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.models.base import Base


class Offer(Base):
    __tablename__ = "offer"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    product: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    batches: Mapped[int] = mapped_column(Integer, nullable=False)

    # Owning supplier
    offerer: Mapped[int] = mapped_column(ForeignKey("app_user.id"), nullable=False, index=True)
