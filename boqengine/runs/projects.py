"""ProjectStore: project snapshots keyed by project id, backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from boqengine.models.project import Project
from boqengine.runs.recorder import utc_timestamp

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS projects (
    project_id  TEXT PRIMARY KEY,
    updated_at  TEXT NOT NULL,
    payload     TEXT NOT NULL
);
"""


class ProjectStore:
    """Saves and loads whole project snapshots.

    A save replaces the stored snapshot; calculations always receive the
    loaded copy, so later saves never affect a run already in progress.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        self._conn = sqlite3.connect(self._db_path)
        if self._db_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def save(self, project: Project) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO projects (project_id, updated_at, payload) VALUES (?, ?, ?)",
            (project.id, utc_timestamp(), project.to_json(indent=None)),
        )
        self._conn.commit()
        logger.debug("Saved project %s", project.id)

    def load(self, project_id: str) -> Project | None:
        row = self._conn.execute(
            "SELECT payload FROM projects WHERE project_id = ?", (project_id,)
        ).fetchone()
        return Project.model_validate_json(row[0]) if row else None

    def project_ids(self) -> list[str]:
        rows = self._conn.execute("SELECT project_id FROM projects ORDER BY project_id").fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        self._conn.close()
