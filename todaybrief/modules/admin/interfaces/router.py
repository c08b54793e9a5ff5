"""Admin control panel."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

ADMIN_PAGE = Path(__file__).parent / "static" / "admin.html"

router = APIRouter(tags=["admin"])


@router.get("/admin", response_class=FileResponse, summary="Admin control panel")
async def admin_page() -> FileResponse:
    return FileResponse(ADMIN_PAGE, media_type="text/html")
