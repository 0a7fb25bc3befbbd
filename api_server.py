from __future__ import annotations  # FastAPI server exposing the TechWell engines

import logging
import random
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import ROUTERS
from storage.migrate import migrate
from storage.sqlite import Database

logger = logging.getLogger(__name__)


def create_app(db: Optional[Database] = None, *, rng: Optional[random.Random] = None) -> FastAPI:
    """Build the API around an explicit database handle."""

    db = db or Database.from_settings()
    migrate(str(db.path))

    app = FastAPI(title="TechWell Learning & Interview API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.db = db
    app.state.rng = rng
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    logger.info("TechWell API ready on %s", db.path)
    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
