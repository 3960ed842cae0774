# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio CMS API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    PortfolioException,
    application_error_handler,
    portfolio_exception_handler,
    validation_exception_handler,
)
from app.routers import health, profile, education, experience, skills, projects, documents
from app.auth import routes as auth_routes
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info(f"Starting Portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Portfolio API")


# Create FastAPI application
app = FastAPI(
    title="Portfolio CMS API",
    description="""
## Single-user portfolio backend

The owner manages their portfolio through authenticated dashboard endpoints;
visitors read it through the `/public` endpoints.

### Resources

| Resource | Dashboard | Public |
|----------|-----------|--------|
| Profile | `/api/profile` | `/api/profile/public` |
| Education | `/api/education` | `/api/education/public` |
| Experience | `/api/experience` | `/api/experience/public` |
| Skills | `/api/skills` | `/api/skills/public` |
| Projects | `/api/projects` | `/api/projects/public` |
| Documents | `/api/documents`, `/api/documents/upload` | - |

PUT and DELETE take the record id as `?id=` or as `"id"` in the JSON body.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Session verification and the login callback"},
        {"name": "Profile", "description": "The owner's profile"},
        {"name": "Education", "description": "Education history"},
        {"name": "Experience", "description": "Work experience"},
        {"name": "Skills", "description": "Skills and proficiency"},
        {"name": "Projects", "description": "Portfolio projects"},
        {"name": "Documents", "description": "Certificates and other uploaded documents"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(PortfolioException, portfolio_exception_handler)
app.add_exception_handler(ApplicationError, application_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])
app.include_router(education.router, prefix="/api/education", tags=["Education"])
app.include_router(experience.router, prefix="/api/experience", tags=["Experience"])
app.include_router(skills.router, prefix="/api/skills", tags=["Skills"])
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Portfolio CMS API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
