"""Version 1 API router."""

from fastapi import APIRouter

from apps.api.v1.endpoints import (
    addresses,
    admin_orders,
    admin_products,
    cart,
    catalog,
    orders,
    products,
    questions,
    wishlist,
)

api_router = APIRouter()

# Storefront
api_router.include_router(products.router)
api_router.include_router(catalog.router)
api_router.include_router(cart.router)
api_router.include_router(orders.router)
api_router.include_router(addresses.router)
api_router.include_router(wishlist.router)
api_router.include_router(questions.router)

# Back office
api_router.include_router(admin_products.router)
api_router.include_router(admin_orders.router)
api_router.include_router(questions.admin_router)
