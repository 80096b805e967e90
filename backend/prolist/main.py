import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prolist import __version__
from prolist.api.router import api_router
from prolist.config import settings
from prolist.database import async_session_factory, create_tables
from prolist.middleware.logging import RequestLoggingMiddleware
from prolist.seeds import seed_demo_data

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    if settings.seed_demo_data:
        async with async_session_factory() as session:
            await seed_demo_data(session)
            await session.commit()

    logger.info("Starting ProList compliance backend (env=%s)", settings.environment)
    yield
    logger.info("Shutting down ProList compliance backend")


app = FastAPI(
    title="ProList - Export Compliance Documents",
    description="Document requirement rules, catalogue reconciliation and version lifecycle for export shipments",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix="/api")


def run() -> None:
    import uvicorn

    uvicorn.run(
        "prolist.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
