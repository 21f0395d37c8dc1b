from fastapi import APIRouter
from free_gift.routes.functions.free_gift import functions_router as free_gift_router

functions_router = APIRouter(tags=["functions"])
functions_router.include_router(free_gift_router)
