import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings
from database import check_db_connection, connect, ensure_indexes
from errors import register_error_handlers
from routes import auth, cart, product, seller_request, user, wishlist

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, database=None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.db is None:
            client, app.state.db = connect(settings)
            await check_db_connection(client)
        await ensure_indexes(app.state.db)
        logger.info("Catty server started")
        yield
        if client is not None:
            client.close()

    app = FastAPI(title="Catty API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database

    @app.get("/")
    async def root():
        return {"success": True, "message": "Welcome to Catty server"}

    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(product.router)
    app.include_router(seller_request.router)
    app.include_router(wishlist.router)
    app.include_router(cart.router)

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
