"""RunStore: append-only history of calculation runs backed by SQLite."""

from __future__ import annotations

import logging
import secrets
import sqlite3
import string
import time
from datetime import datetime, timezone
from pathlib import Path

from boqengine.config import RUN_HISTORY_LIMIT
from boqengine.models.takeoff import CalcRun

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS calc_runs (
    run_id      TEXT PRIMARY KEY,
    project_id  TEXT NOT NULL,
    timestamp   TEXT NOT NULL,
    status      TEXT NOT NULL,
    payload     TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_calc_runs_project
    ON calc_runs (project_id, timestamp DESC);
"""

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def new_run_id(now_ms: int | None = None) -> str:
    """Return ``run_<epoch ms>_<9 random base36 chars>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return f"run_{now_ms}_{suffix}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RunStore:
    """Stores completed or failed CalcRuns; records are never updated.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Defaults to ``':memory:'``.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        self._conn = sqlite3.connect(self._db_path)
        if self._db_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def record(self, run: CalcRun) -> CalcRun:
        """Append *run*.  Raises ValueError if its run id already exists."""
        try:
            self._conn.execute(
                "INSERT INTO calc_runs (run_id, project_id, timestamp, status, payload) "
                "VALUES (?, ?, ?, ?, ?)",
                (run.run_id, run.project_id, run.timestamp, run.status, run.to_json(indent=None)),
            )
            self._conn.commit()
        except sqlite3.IntegrityError:
            raise ValueError(f"Run already recorded: {run.run_id}") from None
        logger.info("Recorded run %s for project %s (%s)", run.run_id, run.project_id, run.status)
        return run

    def get(self, run_id: str) -> CalcRun | None:
        row = self._conn.execute(
            "SELECT payload FROM calc_runs WHERE run_id = ?", (run_id,)
        ).fetchone()
        return CalcRun.model_validate_json(row[0]) if row else None

    def list_runs(self, project_id: str, limit: int = RUN_HISTORY_LIMIT) -> list[CalcRun]:
        """Runs of a project, newest first, at most *limit* (capped at the history limit)."""
        limit = max(1, min(limit, RUN_HISTORY_LIMIT))
        rows = self._conn.execute(
            "SELECT payload FROM calc_runs WHERE project_id = ? "
            "ORDER BY timestamp DESC, run_id DESC LIMIT ?",
            (project_id, limit),
        ).fetchall()
        return [CalcRun.model_validate_json(row[0]) for row in rows]

    def latest(self, project_id: str) -> CalcRun | None:
        runs = self.list_runs(project_id, limit=1)
        return runs[0] if runs else None

    def count(self, project_id: str | None = None) -> int:
        if project_id is None:
            row = self._conn.execute("SELECT COUNT(*) FROM calc_runs").fetchone()
        else:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM calc_runs WHERE project_id = ?", (project_id,)
            ).fetchone()
        return row[0]

    def close(self) -> None:
        self._conn.close()
