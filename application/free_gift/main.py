from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from free_gift.config.settings import FreeGiftConfigs
from free_gift.logging.utils import initialize_logging, get_app_logger
from free_gift.middlewares.logging_middleware import AuditMiddleware

configs = FreeGiftConfigs()

# Initialize Sentry (must be done early, before other imports)
from free_gift.config.sentry import init_sentry
init_sentry()

initialize_logging()
logger = get_app_logger('free_gift.main')

DEBUG = configs.DEBUG

logger.info(f"Running in {'debug' if DEBUG else 'production'} mode")


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Starting free gift function service")
    yield
    logger.info("Shutting down free gift function service")

# Disable docs in production (when DEBUG=false)
docs_url = "/docs" if DEBUG else None
redoc_url = "/redoc" if DEBUG else None

app = FastAPI(
    title="Free Gift Function",
    version=configs.APP_VERSION,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url
)

if configs.ALLOWED_ORIGINS:
   origins = [origin.strip() for origin in configs.ALLOWED_ORIGINS.split(",")]
else:
   origins = ["*"]

# Request/Audit logging middleware (place early)
app.add_middleware(AuditMiddleware)

logger.info(f"Configuring CORS with allowed origins: {origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register custom exception handlers
from free_gift.middlewares.handlers import register_exception_handlers
register_exception_handlers(app)


# Routes
from free_gift.routes.functions import functions_router
from free_gift.routes.storefront import storefront_router
from free_gift.routes.health import router as health_router

app.include_router(functions_router, prefix="/functions/v1")
app.include_router(storefront_router, prefix="/storefront/v1")
app.include_router(health_router, tags=["health"])
