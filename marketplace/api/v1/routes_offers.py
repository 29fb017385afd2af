# File: marketplace/api/v1/routes_offers.py

from fastapi import APIRouter, Depends, status

from marketplace.api.deps import any_user, buyer_only, get_offer_service, supplier_only
from marketplace.schemas.bid import BidCreateResponse, BidPayload, OfferBidsResponse
from marketplace.schemas.offer import (
    DeleteOfferPayload,
    MessageResponse,
    OfferCreatePayload,
    OfferCreateResponse,
    OfferDetail,
    OfferListItem,
    OfferSummary,
)
from marketplace.services.auth_service import Principal
from marketplace.services.offer_service import OfferService

router = APIRouter()


@router.api_route("", methods=["GET", "POST"], response_model=list[OfferListItem], include_in_schema=False)
@router.api_route(
    "/",
    methods=["GET", "POST"],
    response_model=list[OfferListItem],
    summary="List all offers",
)
def list_offers(
    principal: Principal = Depends(any_user),
    offers: OfferService = Depends(get_offer_service),
):
    return offers.list_offers(principal)


@router.api_route(
    "/myoffers",
    methods=["GET", "POST"],
    response_model=list[OfferSummary],
    summary="Offers posted by the calling supplier",
)
def list_my_offers(
    principal: Principal = Depends(supplier_only),
    offers: OfferService = Depends(get_offer_service),
):
    return offers.list_my_offers(principal)


@router.api_route(
    "/offerdetails/{offer_id}",
    methods=["GET", "POST"],
    response_model=OfferDetail,
    summary="Single offer with its offerer",
)
def offer_details(
    offer_id: int,
    principal: Principal = Depends(any_user),
    offers: OfferService = Depends(get_offer_service),
):
    return offers.get_offer_detail(principal, offer_id)


@router.post(
    "/offercreate",
    response_model=OfferCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an offer (suppliers)",
)
def create_offer(
    payload: OfferCreatePayload,
    principal: Principal = Depends(supplier_only),
    offers: OfferService = Depends(get_offer_service),
):
    offer = offers.create_offer(principal, payload)
    return OfferCreateResponse(message="Offer created successfully.", offer=offer)


@router.post(
    "/offerbid",
    response_model=BidCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Bid on an offer (buyers)",
)
def place_bid(
    payload: BidPayload,
    principal: Principal = Depends(buyer_only),
    offers: OfferService = Depends(get_offer_service),
):
    bid = offers.place_bid(principal, payload)
    return BidCreateResponse(message="Bid placed successfully.", bid=bid)


@router.api_route(
    "/offerbid/{offer_id}",
    methods=["GET", "POST"],
    response_model=OfferBidsResponse,
    summary="All bids on an offer",
)
def list_bids(
    offer_id: int,
    principal: Principal = Depends(any_user),
    offers: OfferService = Depends(get_offer_service),
):
    return offers.list_bids(principal, offer_id)


@router.delete("/{offer_id}", response_model=MessageResponse, summary="Delete own offer")
def delete_offer(
    offer_id: int,
    payload: DeleteOfferPayload | None = None,
    principal: Principal = Depends(supplier_only),
    offers: OfferService = Depends(get_offer_service),
):
    username = payload.username if payload is not None else None
    offers.delete_offer(principal, offer_id, username)
    return MessageResponse(message="Offer deleted successfully.")
