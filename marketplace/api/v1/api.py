from fastapi import APIRouter

from marketplace.api.v1.routes_auth import router as auth_router
from marketplace.api.v1.routes_offers import router as offers_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(offers_router, prefix="/offers", tags=["offers"])
