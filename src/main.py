import src.models
from src.auth.router import router as auth_router
from src.users.router import router as users_router
from src.checkin.router import router as check_in_router
from src.milestones.router import router as milestones_router
from src.rewards.router import router as rewards_router, admin_router as rewards_admin_router
from src.transactions.router import router as transactions_router, admin_router as transactions_admin_router
from src.leveling.router import router as leveling_router
from src.cosmetics.router import router as cosmetics_router
from src.giftcodes.router import router as gift_codes_router, admin_router as gift_codes_admin_router
from src.config import settings
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
from pathlib import Path

from src.utils.logging import configure_logging

# Load environment variables from .env file
load_dotenv()

# Configure logging from logging.ini file
logging_config_path = Path(__file__).parent.parent / "logging.ini"
if configure_logging(logging_config_path, settings.LOG_LEVEL):
    print(f"[Startup] Logging configured from {logging_config_path}")
else:
    print(
        f"[Startup] Logging config file not found at {logging_config_path}, using basic configuration"
    )

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    swagger_ui_parameters={"docExpansion": "none"}
)

# Add CORS middleware
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin)
                       for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include routers
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(check_in_router, prefix=settings.API_V1_STR)
app.include_router(milestones_router, prefix=settings.API_V1_STR)
app.include_router(rewards_router, prefix=settings.API_V1_STR)
app.include_router(transactions_router, prefix=settings.API_V1_STR)
app.include_router(leveling_router, prefix=settings.API_V1_STR)
app.include_router(cosmetics_router, prefix=settings.API_V1_STR)
app.include_router(gift_codes_router, prefix=settings.API_V1_STR)

# Admin routers
app.include_router(rewards_admin_router, prefix=settings.API_V1_STR)
app.include_router(transactions_admin_router, prefix=settings.API_V1_STR)
app.include_router(gift_codes_admin_router, prefix=settings.API_V1_STR)

# Root endpoint


@app.get("/")
async def root():
    return {
        "message": "Chào mừng đến với Audition AI Studio!",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc"
    }

# Health check endpoint


@app.get("/health")
async def health_check():
    return {"status": "hoạt động bình thường"}

# Startup event


@app.on_event("startup")
async def startup_event():
    logger = logging.getLogger(__name__)
    logger.info("Application starting up...")

    # Optional: auto run alembic migrations on startup
    if settings.AUTO_MIGRATE_ON_STARTUP:
        try:
            import subprocess
            subprocess.run(["alembic", "upgrade", "head"], check=True)
            logger.info("[Startup] Alembic migrations applied")
        except Exception as e:
            logger.error(f"[Startup] Alembic migration failed: {e}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
