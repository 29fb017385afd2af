# File: marketplace/services/offer_service.py

"""
Offer & bid operations.

Every method takes the already-authorized Principal; role gating happens
in the API layer before these run.
"""

import logging
from typing import Optional

from marketplace.core.errors import AuthorizationError, NotFoundError, ValidationError
from marketplace.db.store import CredentialStore
from marketplace.schemas.bid import BidListItem, BidPayload, BidRead, OfferBidsResponse
from marketplace.schemas.offer import (
    OfferCreatePayload,
    OfferDetail,
    OfferListItem,
    OfferRead,
    OfferSummary,
)
from marketplace.services.auth_service import Principal

logger = logging.getLogger(__name__)

OFFER_REQUIRED_FIELDS = ("product", "quantity", "start_date", "end_date", "price", "batches")


def _is_missing(value) -> bool:
    # absent, null, empty string and zero are all rejected
    return value is None or value == "" or value == 0


class OfferService:
    def __init__(self, store: CredentialStore):
        self.store = store

    def list_offers(self, principal: Principal) -> list[OfferListItem]:
        return [OfferListItem.model_validate(row) for row in self.store.list_offers()]

    def list_my_offers(self, principal: Principal) -> list[OfferSummary]:
        rows = self.store.list_offers_by_offerer(principal.id)
        return [OfferSummary.model_validate(row) for row in rows]

    def get_offer_detail(self, principal: Principal, offer_id: int) -> OfferDetail:
        row = self.store.get_offer_detail(offer_id)
        if row is None:
            raise NotFoundError("Offer not found.")
        return OfferDetail.model_validate(row)

    def create_offer(self, principal: Principal, payload: OfferCreatePayload) -> OfferRead:
        if any(_is_missing(getattr(payload, name)) for name in OFFER_REQUIRED_FIELDS):
            raise ValidationError("All fields are required.")

        offer = self.store.create_offer(
            product=payload.product,
            quantity=payload.quantity,
            start_date=payload.start_date,
            end_date=payload.end_date,
            price=payload.price,
            batches=payload.batches,
            offerer=principal.id,
        )
        logger.info("Supplier %r created offer %s", principal.username, offer.id)
        return OfferRead.model_validate(offer)

    def place_bid(self, principal: Principal, payload: BidPayload) -> BidRead:
        if _is_missing(payload.offerId) or _is_missing(payload.bidPrice):
            raise ValidationError("Offer ID and bid price are required.")

        bid = self.store.create_bid(
            offer_id=payload.offerId,
            bidder_id=principal.id,
            price=payload.bidPrice,
        )
        if bid is None:
            raise NotFoundError("Offer not found.")
        logger.info("Buyer %r bid %s on offer %s", principal.username, bid.price, bid.offer)
        return BidRead.model_validate(bid)

    def list_bids(self, principal: Principal, offer_id: int) -> OfferBidsResponse:
        bids = [BidListItem.model_validate(row) for row in self.store.list_bids_for_offer(offer_id)]
        return OfferBidsResponse(offerId=offer_id, totalBids=len(bids), bids=bids)

    def delete_offer(self, principal: Principal, offer_id: int, username: Optional[str] = None) -> None:
        """
        Delete an offer owned by the acting user.

        A missing offer and an offer owned by someone else both give 403, so
        non-owners cannot probe which offer ids exist.
        """
        acting = username or principal.username
        if acting != principal.username:
            logger.warning("%r tried to delete offer %s as %r", principal.username, offer_id, acting)
            raise AuthorizationError("Unauthorized or offer not found.")
        deleted = self.store.delete_owned_offer(offer_id, acting)
        if deleted is None:
            raise NotFoundError("User not found.")
        if deleted == 0:
            logger.info("Delete of offer %s by %r refused", offer_id, acting)
            raise AuthorizationError("Unauthorized or offer not found.")
        logger.info("Offer %s deleted by %r", offer_id, acting)
