import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bolus_ledger import __version__
from bolus_ledger.api import api_router
from bolus_ledger.core.logging import configure_logging
from bolus_ledger.core.settings import get_settings
from bolus_ledger.services.session import build_session

configure_logging()
settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Bolus Ledger", version=__version__)


def _collect_cors_origins() -> list[str]:
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    configured_origins = settings.security.cors_origins
    env_origins = [
        origin.strip()
        for origin in os.environ.get("FRONTEND_ORIGIN", "").split(",")
        if origin.strip()
    ]

    collected: list[str] = []
    for origin in (*default_origins, *configured_origins, *env_origins):
        if origin and origin not in collected:
            collected.append(origin)

    return collected


app.add_middleware(
    CORSMiddleware,
    allow_origins=_collect_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")

# One in-memory session per process; everything is gone on restart.
app.state.session = build_session(settings)
logger.info("Session ready with %d products", len(app.state.session.catalog))


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Bolus Ledger Backend Running"}


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    run()
