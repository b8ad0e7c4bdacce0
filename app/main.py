"""Main FastAPI application for the family tree archive"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import family_members, relationships, documents, jobs, seed
from app.config import get_settings
from app.database import init_db
import logging

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Family Tree Archive API",
    description="Family members, their parent/child/spouse relationships, life timelines and documents",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /api prefix
app.include_router(family_members.router, prefix="/api", tags=["Family Members"])
app.include_router(relationships.router, prefix="/api", tags=["Relationships"])
app.include_router(documents.router, prefix="/api", tags=["Documents"])
app.include_router(jobs.router, prefix="/api", tags=["Jobs"])
app.include_router(seed.router, prefix="/api", tags=["Seed"])


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    logger.info("Initializing database...")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
