"""API v1 router composition."""

from fastapi import APIRouter

from bakery.api.v1.endpoints import auth, closing_periods, orders, products

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/authentication", tags=["authentication"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(products.ordering_router, prefix="/product-ordering", tags=["products"])
api_router.include_router(closing_periods.router, prefix="/closing-periods", tags=["closing-periods"])
