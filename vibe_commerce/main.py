# vibe_commerce/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from vibe_commerce.api.errors import register_exception_handlers
from vibe_commerce.api.routers import cart, checkout, health, products
from vibe_commerce.data.database import init_db, make_engine, make_session_factory
from vibe_commerce.data.seed import seed_products
from vibe_commerce.services.lock_service import LockService, build_lock_service
from vibe_commerce.utils.logging import RequestLoggingMiddleware, get_logger
from vibe_commerce.utils.settings import CORS_ORIGIN, DATABASE_URL, PORT

logger = get_logger(__name__)


def create_app(
    engine: Engine | None = None,
    lock_service: LockService | None = None,
    seed: bool = True,
) -> FastAPI:
    """
    Sklada aplikacje. Engine i lock service naleza do procesu,
    serwisy dostaja tylko sesje przez Depends(get_db).
    """
    engine = engine or make_engine(DATABASE_URL)
    session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Inicjalizacja bazy: {engine.url.render_as_string(hide_password=True)}")
        init_db(engine)
        if seed:
            seed_products(session_factory)
        yield
        engine.dispose()
        logger.info("Polaczenia z baza zamkniete")

    app = FastAPI(
        title="Vibe Commerce API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory
    app.state.lock_service = lock_service or build_lock_service()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
