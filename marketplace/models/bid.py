# File: marketplace/models/bid.py

"""
Bid model.

Bids are append-only: there is no update or delete path apart from the
cascade when the owning offer is removed.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.models.base import Base


class Bid(Base):
    __tablename__ = "bid"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    bidder: Mapped[int] = mapped_column(ForeignKey("app_user.id"), nullable=False, index=True)
    offer: Mapped[int] = mapped_column(
        ForeignKey("offer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
