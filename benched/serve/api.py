"""FastAPI application exposing session reports."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException

from ..core.registry import SessionRegistry
from ..core.session import BenchmarkSession
from ..report.export import ReportExporter, phase_digest
from ..report.generator import ReportGenerator
from .schemas import ExportRequest, ExportSummary, PhaseDigestModel, SessionInfo, TableModel

TABLES = ("activities", "phases", "frames", "raw")


def create_app(registry: Optional[SessionRegistry] = None, exporter: Optional[ReportExporter] = None) -> FastAPI:
    app = FastAPI(title="Benched API")
    registry = registry if registry is not None else SessionRegistry()
    exporter = exporter or ReportExporter()
    generator = ReportGenerator(exporter.report_config)
    app.state.registry = registry

    def lookup(name: str) -> BenchmarkSession:
        session = registry.get(name) or registry.find(name)
        if session is None:
            raise HTTPException(status_code=404, detail=f"unknown session: {name}")
        return session

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/sessions", response_model=List[SessionInfo])
    async def list_sessions() -> List[SessionInfo]:
        out = []
        for context_id, session in sorted(registry.sessions().items()):
            frames, completed, open_ = session.summary_counts()
            out.append(
                SessionInfo(
                    context_id=context_id,
                    name=session.name,
                    frames=frames,
                    completed_activities=completed,
                    open_activities=open_,
                    current_frame=session.current_frame,
                )
            )
        return out

    @app.get("/sessions/{name}/tables/{table}", response_model=TableModel)
    async def get_table(name: str, table: str) -> TableModel:
        if table not in TABLES:
            raise HTTPException(status_code=404, detail=f"unknown table: {table}")
        snapshot = lookup(name).snapshot()
        builders = {
            "activities": generator.activity_summary,
            "phases": generator.phase_summary,
            "frames": generator.windowed_frames,
            "raw": generator.raw_frames,
        }
        result = builders[table](snapshot)
        return TableModel(name=result.name, headers=result.headers, rows=result.rows)

    @app.get("/sessions/{name}/phases/digest", response_model=List[PhaseDigestModel])
    async def get_digest(name: str) -> List[PhaseDigestModel]:
        return [PhaseDigestModel(**asdict(d)) for d in phase_digest(lookup(name))]

    @app.post("/sessions/{name}/export", response_model=ExportSummary)
    def export(name: str, payload: ExportRequest) -> ExportSummary:
        root = Path(payload.output_dir) if payload.output_dir else None
        result = exporter.export(lookup(name), root)
        return ExportSummary(
            directory=str(result.directory),
            written=[str(p) for p in result.written],
            failed=[str(p) for p in result.failed],
        )

    return app


__all__ = ["create_app", "TABLES"]
