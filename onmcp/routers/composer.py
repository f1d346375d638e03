"""Composer route - merge uploaded .0n files into one SWITCH document."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..composer import ComposerError, generate_switch_file, parse_on_file
from ..schemas.composer import ComposeRequest

router = APIRouter(prefix="/api/composer", tags=["composer"])


@router.post("/compose")
async def compose(data: ComposeRequest):
    try:
        parsed = [parse_on_file(f.filename, f.content) for f in data.files]
    except ComposerError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return generate_switch_file(data.name, parsed, author=data.author)
