"""
Front-end serving.

Serves the prebuilt single-page front-end from settings.static_dir.
Existing files are returned as-is; any other path falls back to
index.html so client-side routing works. Paths under /api never fall
back: an unknown API path is a plain 404.

This router must be included last, its catch-all would otherwise
shadow real routes.
"""

from pathlib import Path

from fastapi import APIRouter, Response, status
from fastapi.responses import FileResponse

from ..dependencies import SettingsDep

router = APIRouter()

INDEX_FILE = "index.html"


def resolve_static_file(static_dir: Path, requested: str) -> Path | None:
    """
    Map a request path to a file inside static_dir.

    Returns None when the file does not exist or the path escapes
    static_dir (e.g. via '..').
    """
    root = static_dir.resolve()
    candidate = (root / requested.lstrip("/")).resolve()

    if candidate != root and root not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, settings: SettingsDep) -> Response:
    if full_path.startswith("api"):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    static_dir = Path(settings.static_dir)

    asset = resolve_static_file(static_dir, full_path) if full_path else None
    if asset is None:
        asset = resolve_static_file(static_dir, INDEX_FILE)
    if asset is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return FileResponse(asset)
