from fastapi import FastAPI
from datetime import datetime
from app.core.config import settings
from app.core.logging_config import get_logger, setup_logging
from app.middleware.metrics import MetricsMiddleware, new_metrics
from app.database.connection import Base, engine, get_store
from app.models import document  # noqa: F401  registers the documents table
from app.routes import system
from app.routes.auth import router as auth_router
from app.routes.products import router as product_router
from app.routes.categories import router as category_router
from app.routes.attributes import router as attribute_router
from app.routes.users import router as user_router
from app.routes.storefront import shop_router, retailer_router
from app.services.user_service import ensure_admin

setup_logging(settings.LOG_LEVEL)
logger = get_logger()

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Product Catalog & Storefront Back-Office")

app.add_middleware(MetricsMiddleware)


app.include_router(auth_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(attribute_router)
app.include_router(user_router)
app.include_router(shop_router)
app.include_router(retailer_router)
app.include_router(system.router)

@app.on_event("startup")
async def startup_event():
    app.state.start_time = datetime.utcnow()
    app.state.metrics = new_metrics()

    if settings.BOOTSTRAP_ADMIN_USERNAME and settings.BOOTSTRAP_ADMIN_PASSWORD:
        admin = await ensure_admin(get_store(), settings.BOOTSTRAP_ADMIN_USERNAME, settings.BOOTSTRAP_ADMIN_PASSWORD)
        logger.info("Bootstrap admin %s ready", admin["username"])

    logger.info("Catalog service started; namespaces: %s", ", ".join(settings.CATALOG_DATABASES))
