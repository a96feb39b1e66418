"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables from .env file
load_dotenv()

from app.adapters.inbound.http.error_handlers import register_exception_handlers  # noqa: E402
from app.adapters.inbound.http.routes import event_bus, router  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Drain and stop the listing event bus on shutdown."""
    yield
    event_bus.shutdown(wait=True)


app = FastAPI(
    title="Car Marketplace API",
    description="Car listing search and lifecycle management using Clean Architecture",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(router)
