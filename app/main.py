from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import Base, engine
from app.config import settings
from app.utils.logging import get_logger

# Import models so SQLAlchemy registers tables
from app.models import (  # noqa: F401
    cat,
    pedigree_connection,
    pedigree_tree,
    page_visit,
    synthetic_visit,
    announcement,
)

# Routers
from app.routers import (
    auth_router,
    cat_router,
    pedigree_router,
    analytics_router,
    announcement_router,
)

logger = get_logger(__name__)

# -----------------------
# CREATE APP
# -----------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for the cattery catalog website.",
    version="1.0.0",
)

# -----------------------
# CORS
# -----------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------
# DATABASE TABLES
# -----------------------
Base.metadata.create_all(bind=engine)
logger.info("Database ready (%s environment)", settings.ENV)

# -----------------------
# ROUTES
# -----------------------
app.include_router(auth_router.router)
app.include_router(cat_router.router)
app.include_router(pedigree_router.router)
app.include_router(analytics_router.router)
app.include_router(announcement_router.router)

# -----------------------
# HEALTH CHECK
# -----------------------
@app.get("/")
def root():
    return {"message": "Cattery API is running!"}
