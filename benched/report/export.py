"""Persist report tables and log quick phase digests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol

from ..core.session import BenchmarkSession
from ..utils.fileio import ensure_dir, write_delimited, write_yaml
from ..utils.logging import logger
from .generator import ReportConfig, ReportGenerator
from .tables import Report, Table


class TableSink(Protocol):
    def write(self, table: Table, destination: Path) -> None:
        ...


class CsvTableSink:
    """Writes tables as ``;``-delimited text through pandas."""

    def __init__(self, delimiter: str = ";"):
        self.delimiter = delimiter

    def write(self, table: Table, destination: Path) -> None:
        write_delimited(table.headers, table.rows, destination, delimiter=self.delimiter)


@dataclass
class ExportConfig:
    output_dir: Path = Path("benchmarks")
    write_manifest: bool = True


@dataclass
class ExportResult:
    directory: Path
    written: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def export_dirname(session_name: str, when: Optional[datetime] = None) -> str:
    when = when or datetime.now()
    return f"BenchmarkSession {session_name} {when:%Y-%m-%d %H-%M-%S}"


class ReportExporter:
    """Generate a report for a session and hand every table to a sink.

    A failing table is logged and skipped; the others are still written.
    """

    def __init__(
        self,
        sink: Optional[TableSink] = None,
        report_config: Optional[ReportConfig] = None,
        config: Optional[ExportConfig] = None,
    ):
        self.report_config = report_config or ReportConfig()
        self.sink = sink or CsvTableSink(self.report_config.number_format.delimiter)
        self.generator = ReportGenerator(self.report_config)
        self.config = config or ExportConfig()

    def export(self, session: BenchmarkSession, destination_root: Optional[Path] = None) -> ExportResult:
        report = self.generator.build(session.snapshot())
        root = Path(destination_root) if destination_root is not None else self.config.output_dir
        directory = root / export_dirname(session.name)
        try:
            ensure_dir(directory)
        except OSError as exc:
            logger.error("exporting benchmarks failed: cannot create {dir}: {err}", dir=directory, err=exc)
            return ExportResult(directory=directory, failed=[directory])
        return self.write_report(report, directory)

    def write_report(self, report: Report, directory: Path) -> ExportResult:
        result = ExportResult(directory=directory)
        for stem, table in report.tables().items():
            path = directory / f"{stem}.csv"
            try:
                self.sink.write(table, path)
            except Exception as exc:
                logger.error("exporting benchmarks failed: {path}: {err}", path=path, err=exc)
                result.failed.append(path)
            else:
                result.written.append(path)

        if self.config.write_manifest:
            path = directory / "manifest.yaml"
            try:
                write_yaml(self.manifest(report), path)
            except OSError as exc:
                logger.error("exporting benchmarks failed: {path}: {err}", path=path, err=exc)
                result.failed.append(path)
            else:
                result.written.append(path)

        logger.info(
            "exported {n} tables for {session} to {dir}",
            n=len(result.written),
            session=report.session,
            dir=directory,
        )
        return result

    def manifest(self, report: Report) -> dict:
        return {
            "session": report.session,
            "frames": len(report.raw_frames.rows),
            "activity_categories": sorted(report.grouped_activities),
            "phases": report.phases.column("Phase"),
            "group_size": self.report_config.group_size,
            "created": datetime.now().isoformat(timespec="seconds"),
        }


@dataclass(frozen=True)
class PhaseDigest:
    phase: str
    count: int
    total: float
    avg: float
    max: float
    last_hundred_avg: float


def phase_digest(session: BenchmarkSession) -> List[PhaseDigest]:
    """Per-phase summary of the samples currently held by the session."""

    digests = []
    for phase, samples in session.phase_samples.items():
        if not samples:
            continue
        total = sum(samples)
        tail = samples[-100:]
        digests.append(
            PhaseDigest(
                phase=phase,
                count=len(samples),
                total=total,
                avg=total / len(samples),
                max=max(samples),
                last_hundred_avg=sum(tail) / len(tail),
            )
        )
    digests.sort(key=lambda d: d.count, reverse=True)
    return digests


def dump_results(session: BenchmarkSession) -> List[PhaseDigest]:
    digests = phase_digest(session)
    if not digests:
        logger.info("no phase samples recorded for {session}", session=session.name)
        return digests

    width = max(len(d.phase) for d in digests)
    count_width = max(len(str(d.count)) for d in digests)
    logger.info("--- BENCHMARKS ---")
    for d in digests:
        logger.info(
            f"[{d.phase:<{width}}] {d.count:<{count_width}} times, {d.total:.3f}s total, "
            f"{d.avg * 1000:.3f}ms avg, {d.max * 1000:.3f}ms max, last 100: {d.last_hundred_avg * 1000:.3f}ms avg"
        )
    logger.info("------------------")
    return digests


__all__ = [
    "TableSink",
    "CsvTableSink",
    "ExportConfig",
    "ExportResult",
    "ReportExporter",
    "PhaseDigest",
    "phase_digest",
    "dump_results",
    "export_dirname",
]
