from typing import Any
from fastapi import APIRouter, Body, Request

# Core functions
from free_gift.core.free_gift_functions import run_free_gift_core

# DTOs
from free_gift.dto.functions import FunctionRunResult

# Request context
from free_gift.middlewares.request_context import request_context

functions_router = APIRouter(prefix="/free-gift", tags=["functions-free-gift"])


@functions_router.post("/run", response_model=FunctionRunResult)
async def run_free_gift(request: Request, payload: Any = Body(...)):
    """ Evaluate a cart snapshot and return the gift-with-purchase discount instruction """
    request_context.shop_domain = request.headers.get("x-shopify-shop-domain", "")
    request_context.cart_token = request.headers.get("x-cart-token", "")
    return run_free_gift_core(payload)
