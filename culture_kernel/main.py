import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .cache import CatalogCache
from .config import Settings, get_settings
from .errors import RequestHandlingError
from .render import negotiate, render
from .seed_guard import ensure_healthy

log = logging.getLogger("culture_kernel.api")

def load_catalog(settings: Settings) -> CatalogCache:
    # Runs before the server accepts connections; errors abort startup.
    with ensure_healthy(settings.db_path) as store:
        return CatalogCache.load(store)

def create_app(settings: Optional[Settings] = None, cache: Optional[CatalogCache] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.catalog is None:
            app.state.catalog = load_catalog(settings)
            log.info(
                "serving %d rituals from %s: %s",
                len(app.state.catalog), settings.db_path, ", ".join(app.state.catalog.ids),
            )
        yield

    app = FastAPI(title="Culture Kernel", version=__version__, lifespan=lifespan)
    app.state.catalog = cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/rituals")
    def list_rituals(request: Request):
        mode = negotiate(request.headers.get("user-agent"), request.headers.get("accept"))
        try:
            out = render(request.app.state.catalog, mode)
        except RequestHandlingError:
            log.exception("rendering rituals as %s failed", mode.value)
            raise HTTPException(status_code=500, detail="Internal server error")
        return Response(
            content=out.body,
            media_type=out.media_type,
            headers={"Vary": "Accept, User-Agent"},
        )

    return app

app = create_app()
