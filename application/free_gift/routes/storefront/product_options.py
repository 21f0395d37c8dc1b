from fastapi import APIRouter

# Core functions
from free_gift.core.storefront_functions import render_product_options_core

# DTOs
from free_gift.dto.storefront import ProductOptionsViewRequest, ProductOptionsView

storefront_router = APIRouter(prefix="/product-options", tags=["storefront-product-options"])


@storefront_router.post("/view", response_model=ProductOptionsView)
async def render_product_options(request: ProductOptionsViewRequest):
    """ Render option pickers for a product, optionally applying a new selection first """
    return render_product_options_core(request)
