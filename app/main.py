"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.dependencies import get_session_store
from app.core.logging import setup_logging
from app.db.database import init_db, close_db
from app.api import auth, health, menu, orders
from app.api.webhooks import whatsapp


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    session_store = get_session_store()
    session_store.start()
    yield
    # Shutdown
    await session_store.stop()
    await close_db()


app = FastAPI(
    title=f"{settings.app_name} Ordering",
    description="WhatsApp ordering backend for restaurants",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(whatsapp.router, prefix="/webhooks", tags=["webhooks"])
app.include_router(auth.router, tags=["dashboard"])
app.include_router(orders.router, tags=["dashboard"])
app.include_router(menu.router, tags=["dashboard"])


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": f"{settings.app_name} backend running",
        "version": "0.1.0",
    }


def run() -> None:
    """Start the server with the configured bind address."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
