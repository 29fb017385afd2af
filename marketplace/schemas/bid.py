# File: marketplace/schemas/bid.py

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BidPayload(BaseModel):
    offerId: Optional[int] = None
    bidPrice: Optional[Decimal] = None


class BidRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bidder: int
    offer: int
    price: float


class BidListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    price: float
    bidder: int
    bidder_name: str


class BidCreateResponse(BaseModel):
    message: str
    bid: BidRead


class OfferBidsResponse(BaseModel):
    offerId: int
    totalBids: int
    bids: list[BidListItem]
