# File: marketplace/schemas/offer.py

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class OfferCreatePayload(BaseModel):
    # All optional here so a missing field reaches the service as a 400,
    # not a framework-level 422.
    product: Optional[str] = None
    quantity: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    price: Optional[Decimal] = None
    batches: Optional[int] = None


class DeleteOfferPayload(BaseModel):
    username: Optional[str] = None


class OfferSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product: str
    quantity: int
    start_date: date
    end_date: date
    batches: int
    price: float


class OfferListItem(OfferSummary):
    offerer_name: str


class OfferDetail(OfferSummary):
    offerer: int
    offerer_name: str
    offerer_role: str


class OfferRead(OfferSummary):
    offerer: int


class OfferCreateResponse(BaseModel):
    message: str
    offer: OfferRead


class MessageResponse(BaseModel):
    message: str
