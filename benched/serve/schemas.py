"""Pydantic models for FastAPI I/O."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class SessionInfo(BaseModel):
    context_id: str
    name: str
    frames: int
    completed_activities: int
    open_activities: int
    current_frame: Optional[int] = None


class TableModel(BaseModel):
    name: str
    headers: List[str]
    rows: List[List[str]]


class PhaseDigestModel(BaseModel):
    phase: str
    count: int
    total: float
    avg: float
    max: float
    last_hundred_avg: float


class ExportRequest(BaseModel):
    output_dir: Optional[str] = None


class ExportSummary(BaseModel):
    directory: str
    written: List[str]
    failed: List[str]


__all__ = [
    "SessionInfo",
    "TableModel",
    "PhaseDigestModel",
    "ExportRequest",
    "ExportSummary",
]
