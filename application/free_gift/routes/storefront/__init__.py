from fastapi import APIRouter
from free_gift.routes.storefront.product_options import storefront_router as product_options_router

storefront_router = APIRouter(tags=["storefront"])
storefront_router.include_router(product_options_router)
