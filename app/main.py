from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logfire

from app.config import settings
from app.database import init_db, close_db
from app.exceptions import AppError
from app.api import api_router

# Initialize Logfire - auto-instruments FastAPI
if settings.logfire_token:
    logfire.configure(
        token=settings.logfire_token,
        service_name="appointment-booking-api",
        environment=settings.app_env,
        console=False,  # Disable console logging (too verbose)
    )
    print("✅ Logfire initialized")
else:
    print("⚠️ Logfire token not set - observability disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    print("🚀 Starting Appointment Booking API...")
    await init_db()
    print("✅ Database initialized")

    yield

    # Shutdown
    print("👋 Shutting down...")
    await close_db()
    print("✅ Database connections closed")


app = FastAPI(
    title=settings.app_name,
    description="Appointment booking between customers and service professionals",
    version="1.0.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
if settings.logfire_token:
    logfire.instrument_fastapi(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render business-rule rejections as {"detail": message}."""
    logfire.info(
        "request_rejected",
        error=type(exc).__name__,
        detail=exc.message,
        path=request.url.path,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
        "environment": settings.app_env,
    }
