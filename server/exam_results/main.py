import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from exam_results.config import settings
from exam_results.database import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    if settings.result_store_backend == "database":
        init_db()
    
    logger.info("🚀 %s is starting...", settings.app_name)
    logger.info("📚 Result store: %s (%s)", settings.result_store_backend, settings.database_url)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.api_version,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# Import and include routers
from exam_results.routes import results

app.include_router(results.router, prefix="/api/results", tags=["Results"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("exam_results.main:app", host=settings.host, port=settings.port)
