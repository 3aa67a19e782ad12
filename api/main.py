import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookmarks import router as bookmarks_router
from core import config, http
from gists import router as gists_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Refuse to start without the gists credential.
    config.require_github_token()

    # One outbound HTTP client per process.
    await http.init_client()
    try:
        yield
    finally:
        await http.close_client()


# Settings below (CORS origins) may come from .env.
config.load_env()

app = FastAPI(lifespan=lifespan)

# Allow the local front-end dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookmarks_router.router, tags=["bookmarks"])
app.include_router(gists_router.router, tags=["gists"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "private start page api", "gists": "/gists"}


def run() -> None:
    """Entry point: validate settings, then serve with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config.require_github_token()
    except config.ConfigError as exc:
        logger.error("startup_aborted reason=%s", exc)
        sys.exit(1)

    host, port = config.api_host(), config.api_port()
    logger.info("api_listening url=http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
