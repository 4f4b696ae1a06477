# cartstore/main.py
from fastapi import FastAPI
import uvicorn

from cartstore.api.routers import carts, health
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cart Service",
        version="1.0.0",
        description="Koszyk w redisie z TTL zaleznym od etapu zakupow",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)

    logger.info("Cart service app created")
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
