"""
StockLens - Main FastAPI Application
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Procurement, sales and inventory dashboard backend",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.on_event("startup")
def create_tables():
    """Create missing tables on the configured database."""
    from app.database import init_db
    try:
        init_db()
        logger.info("Database tables ready")
    except Exception as e:
        logger.exception("Table creation failed: %s", e)
        raise


# Import and include routers
from app.api import account_router, data_router, upload_router

app.include_router(upload_router, prefix="/api", tags=["Spreadsheet Import"])
app.include_router(data_router, prefix="/api", tags=["Dashboard Data"])
app.include_router(account_router, prefix="/api", tags=["Account"])
