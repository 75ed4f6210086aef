from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .config import Settings, settings as default_settings
from .db import JsonBookStore
from .logging_setup import setup_logging
from .repository import BookRepository


def create_app(settings: Optional[Settings] = None, repository: Optional[BookRepository] = None) -> FastAPI:
    cfg = settings or default_settings
    logger = setup_logging(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One store per application; an injected instance wins over the configured file
        owns_store = app.state.repository is None
        if owns_store:
            app.state.repository = JsonBookStore(cfg.books_file)
            logger.info(f"Using books file {cfg.books_file}")
        try:
            yield
        finally:
            # Every mutation is already flushed; only release a store built here
            if owns_store:
                app.state.repository = None

    app = FastAPI(
        title="Bookstore API",
        version="1.0.0",
        docs_url="/api-docs",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = cfg
    app.state.repository = repository

    app.include_router(router)

    @app.get("/")
    async def index():
        return {
            "message": "Bookstore API",
            "docs": "/api-docs",
            "health": "/health",
            "books": {
                "create": {"method": "POST", "url": "/books"},
                "get": {"method": "GET", "url": "/books/{id}"},
                "update": {"method": "PUT", "url": "/books/{id}"},
                "delete": {"method": "DELETE", "url": "/books/{id}"},
                "discounted_price": {"method": "GET", "url": "/books/discounted-price?genre=fantasy&discount=10"},
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
