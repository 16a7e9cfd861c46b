"""
Static frontend serving.

Serves the single-page UI at /, /style.css and /app.js and the whole asset
directory under /static. File access goes through an AssetSource so the
routes do not care where the files live.
"""

from pathlib import Path
from typing import Optional, Protocol, Union

import structlog
from fastapi import APIRouter, FastAPI, status
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

logger = structlog.get_logger(__name__)

DEFAULT_FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"


class AssetSource(Protocol):
    """Read-only access to frontend files."""

    def read(self, name: str) -> Optional[bytes]:
        """Return the file content, or None when the file does not exist."""
        ...


class DirectoryAssetSource:
    """Assets read from a directory on disk."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def read(self, name: str) -> Optional[bytes]:
        path = (self.directory / name).resolve()
        if self.directory.resolve() not in path.parents or not path.is_file():
            return None
        return path.read_bytes()


def build_frontend_router(assets: AssetSource) -> APIRouter:
    """Routes for the top-level frontend files."""
    router = APIRouter(include_in_schema=False)

    @router.get("/")
    async def index() -> Response:
        data = assets.read("index.html")
        if data is None:
            logger.error("Error reading index.html")
            return PlainTextResponse(
                "Error loading page", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(content=data, media_type="text/html; charset=utf-8")

    @router.get("/style.css")
    async def stylesheet() -> Response:
        data = assets.read("style.css")
        if data is None:
            return PlainTextResponse("CSS not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=data, media_type="text/css; charset=utf-8")

    @router.get("/app.js")
    async def script() -> Response:
        data = assets.read("app.js")
        if data is None:
            return PlainTextResponse("JS not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=data, media_type="application/javascript; charset=utf-8")

    return router


def mount_frontend(app: FastAPI, directory: Optional[Union[str, Path]] = None) -> None:
    """
    Register frontend routes and the /static mount on ``app``.

    Args:
        app: FastAPI application
        directory: Asset directory (default: packaged frontend)
    """
    frontend_dir = Path(directory) if directory else DEFAULT_FRONTEND_DIR
    app.include_router(build_frontend_router(DirectoryAssetSource(frontend_dir)))

    if frontend_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(frontend_dir)), name="static")
    else:
        logger.warning("Frontend directory not found", path=str(frontend_dir))
