import logging

from contextlib import asynccontextmanager

# FastAPI imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local imports
from src.salary_sync.api.salary_router import salary_router
from src.salary_sync.config.settings import AppSettings

settings = AppSettings.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage FastAPI application lifecycle - startup and shutdown."""
    logger = logging.getLogger(__name__)

    # Startup
    logger.info("🚀 Starting salary sync service...")
    yield

    # Shutdown
    logger.info("👋 Salary sync service shutdown complete")


# Configure logging levels from environment variables
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

# Client libraries log every request at INFO; keep them quieter than our own logs
for logger_name in settings.quiet_loggers:
    logging.getLogger(logger_name).setLevel(logging.WARNING)

# Initialize the FastAPI app
app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(salary_router)


# Run the app
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.salary_sync.app:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
        access_log=False,
    )
