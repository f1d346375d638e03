"""Composer request schemas."""

from __future__ import annotations

from pydantic import BaseModel


class ComposeFile(BaseModel):
    filename: str
    content: str


class ComposeRequest(BaseModel):
    name: str
    author: str | None = None
    files: list[ComposeFile]
