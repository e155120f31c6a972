"""Main FastAPI application module."""
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clawdjob.core.config import get_settings
from clawdjob.core.logging import setup_logging
from clawdjob.core.storage import get_storage

from .routers import activity, agent, applications, hunt, stats, submit_job

# Initialize logging
logger = setup_logging('api')

app = FastAPI(
    title="ClawdJob API",
    description="""
    Read-only endpoints polled by the ClawdJob dashboard, plus the few
    mutations it needs:

    * Agent identity, live state and statistics
    * Application list and status updates
    * Activity feed
    * Triggering a hunt cycle
    * Visitor job submissions
    """,
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(agent.router, prefix="/api/agent", tags=["agent"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(activity.router, prefix="/api", tags=["activity"])
app.include_router(hunt.router, prefix="/api/hunt", tags=["hunt"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
app.include_router(submit_job.router, prefix="/api/submit-job", tags=["submit-job"])


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Report errors as ``{"error": ...}`` like the dashboard expects."""
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.on_event("startup")
async def startup_event():
    """Select the storage backend on startup."""
    try:
        storage = get_storage()
        logger.info(f"Storage backend ready: {type(storage).__name__}")
    except Exception as e:
        logger.error(f"Error during startup: {str(e)}")
        raise


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "ClawdJob API",
        "version": "1.0.0"
    }
