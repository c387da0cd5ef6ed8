import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Import lifespan manager and API router from their new locations
from satcat.db.lifespan import lifespan
from satcat.api.v1.router import api_router
from satcat.core.config import CORS_ORIGINS

logger = logging.getLogger(__name__)

# Create FastAPI app instance using the lifespan manager
app = FastAPI(
    title="Satellite TLE Catalog API",
    description="API for managing satellite TLE records and their cached SGP4 orbital state.",
    version="0.1.0",
    lifespan=lifespan,  # Use the imported lifespan context manager
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,  # 使用明確的域名列表而不是 ["*"]
    allow_credentials=True,
    allow_methods=["*"],  # 允許所有方法
    allow_headers=["*"],  # 允許所有頭部
)
logger.info(f"CORS middleware added with origins: {CORS_ORIGINS}")


# --- Test Endpoint (Before API v1 Router) ---
@app.get("/ping", tags=["Test"])
async def ping():
    return {"message": "pong"}


# --- Include API Routers ---
app.include_router(api_router, prefix="/api/v1")  # Add a /api/v1 prefix
logger.info("Included API router v1 at /api/v1.")


# --- Root Endpoint ---
@app.get("/", tags=["Root"])
async def read_root():
    """Provides a basic welcome message."""
    logger.info("--- Root endpoint '/' requested ---")
    return {"message": "Welcome to the Satellite TLE Catalog API"}


# --- Uvicorn Entry Point (for direct run, if needed) ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Uvicorn server directly...")
    uvicorn.run(app, host="0.0.0.0", port=8000)

logger.info(
    "FastAPI application setup complete. Ready for Uvicorn via external command."
)
