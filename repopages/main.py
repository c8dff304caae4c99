from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repopages.api.fastapi import FastAPIApp
from repopages.core.config import settings
from repopages.core.temporal_client import temporal_client
from repopages.utils.exception import add_exception_handlers
from repopages.utils.logging.otel_logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up repository pages service")

    # The analysis engine is optional at startup; BranchService reconnects lazily
    try:
        await temporal_client.connect()
        logger.info("Successfully connected to Temporal server")
    except Exception as e:
        logger.error(f"Failed to connect to Temporal server: {e}")

    yield

    logger.info("Shutting down repository pages service")
    await temporal_client.close()

app_instance = FastAPIApp(lifespan=lifespan)
app = app_instance.get_app()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app, logger)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
