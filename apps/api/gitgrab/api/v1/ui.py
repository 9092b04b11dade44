from fastapi import APIRouter
from fastapi.responses import FileResponse
from pathlib import Path

router = APIRouter(tags=["ui"])

INDEX_HTML = Path(__file__).resolve().parents[2] / "static" / "index.html"

@router.get("/", include_in_schema=False)
async def ui_home():
    return FileResponse(str(INDEX_HTML))
