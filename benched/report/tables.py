"""Tabular report containers."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


def safe_stem(text: str) -> str:
    """Replace path separators so ``text`` stays a single file name."""
    return text.replace("/", "_").replace("\\", "_")


class Table(BaseModel):
    """Header row plus rows of already formatted cells."""

    name: str
    headers: List[str]
    rows: List[List[str]] = Field(default_factory=list)

    def add_row(self, cells: List[str]) -> None:
        if len(cells) != len(self.headers):
            raise ValueError(f"{self.name}: row has {len(cells)} cells, expected {len(self.headers)}")
        self.rows.append(cells)

    def column(self, header: str) -> List[str]:
        idx = self.headers.index(header)
        return [row[idx] for row in self.rows]


class Report(BaseModel):
    """All tables generated from one session snapshot."""

    session: str
    activities: Table
    grouped_activities: Dict[str, Table]
    phases: Table
    windowed_frames: Table
    raw_frames: Table

    def tables(self) -> Dict[str, Table]:
        """Tables keyed by their export file stem."""
        out = {"activities": self.activities}
        for category, table in self.grouped_activities.items():
            out[f"activity_{safe_stem(category)}"] = table
        out["frameTime"] = self.phases
        out[self.windowed_frames.name] = self.windowed_frames
        out["raw"] = self.raw_frames
        return out


__all__ = ["Table", "Report", "safe_stem"]
