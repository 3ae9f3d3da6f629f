"""Persistent scene store backed by SQLite."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from scriptboard.board.models import CustomFieldDefinition, Scene
from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import SceneNotFoundError, StoreError
from scriptboard.store.base import SceneStore, build_scene, merge_scene, new_id
from scriptboard.store.schema import create_schema

logger = get_logger(__name__)


class SQLiteSceneStore(SceneStore):
    """Scene store persisting JSON scene documents in one SQLite file."""

    def __init__(
        self,
        settings: ScriptBoardSettings | None = None,
        db_path: Path | str | None = None,
    ) -> None:
        """Initialize the store; the database is opened on first use.

        Args:
            settings: Configuration settings (global settings when None)
            db_path: Database file overriding settings.database_path;
                ":memory:" keeps everything in memory
        """
        super().__init__()
        self.settings = settings or get_settings()
        self.db_path = str(db_path) if db_path is not None else str(self.settings.database_path)
        self._conn: sqlite3.Connection | None = None

    def _connect(self) -> sqlite3.Connection:
        if self._conn is not None:
            return self._conn
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                self.db_path,
                timeout=self.settings.database_timeout,
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                conn.execute(f"PRAGMA journal_mode = {self.settings.database_journal_mode}")
            conn.execute(f"PRAGMA synchronous = {self.settings.database_synchronous}")
            create_schema(conn)
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(
                message=f"Failed to open scene store: {e}",
                hint="Check the database path and its permissions",
                details={"db_path": self.db_path},
            ) from e
        logger.debug("Opened scene store", db_path=self.db_path)
        self._conn = conn
        return conn

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Run statements in a transaction, converting SQLite failures.

        Yields:
            Open connection; committed on success, rolled back on error
        """
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(
                message=f"Scene store operation failed: {e}",
                details={"db_path": self.db_path},
            ) from e
        except Exception:
            conn.rollback()
            raise

    def close(self) -> None:
        """Close the underlying connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    async def create(self, project_id: str, fields: dict[str, Any]) -> str:
        (scene_id,) = await self.create_many(project_id, [fields])
        return scene_id

    async def create_many(self, project_id: str, drafts: list[dict[str, Any]]) -> list[str]:
        scenes = [build_scene(new_id(), fields) for fields in drafts]
        with self.transaction() as conn:
            conn.executemany(
                "INSERT INTO scenes (id, project_id, data_json) VALUES (?, ?, ?)",
                [
                    (scene.id, project_id, json.dumps(scene.document()))
                    for scene in scenes
                ],
            )
        logger.info("Scenes created", project_id=project_id, count=len(scenes))
        self._publish(project_id)
        return [scene.id for scene in scenes]

    async def get(self, project_id: str, scene_id: str) -> Scene:
        with self.transaction() as conn:
            return self._fetch(conn, project_id, scene_id)

    async def list_scenes(self, project_id: str) -> list[Scene]:
        return self._snapshot(project_id)

    async def update(self, project_id: str, scene_id: str, fields: dict[str, Any]) -> None:
        with self.transaction() as conn:
            scene = merge_scene(self._fetch(conn, project_id, scene_id), fields)
            conn.execute(
                """
                UPDATE scenes
                SET data_json = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ? AND project_id = ?
                """,
                (json.dumps(scene.document()), scene_id, project_id),
            )
        logger.debug(
            "Scene updated",
            project_id=project_id,
            scene_id=scene_id,
            fields=sorted(fields),
        )
        self._publish(project_id)

    async def delete(self, project_id: str, scene_id: str) -> None:
        with self.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM scenes WHERE id = ? AND project_id = ?",
                (scene_id, project_id),
            )
            if cursor.rowcount == 0:
                raise SceneNotFoundError(project_id, scene_id)
        logger.info("Scene deleted", project_id=project_id, scene_id=scene_id)
        self._publish(project_id)

    async def get_columns(self, project_id: str) -> list[str] | None:
        with self.transaction() as conn:
            rows = conn.execute(
                "SELECT name FROM board_columns WHERE project_id = ? ORDER BY position",
                (project_id,),
            ).fetchall()
        return [row["name"] for row in rows] if rows else None

    async def set_columns(self, project_id: str, columns: list[str]) -> None:
        with self.transaction() as conn:
            conn.execute("DELETE FROM board_columns WHERE project_id = ?", (project_id,))
            conn.executemany(
                "INSERT INTO board_columns (project_id, position, name) VALUES (?, ?, ?)",
                [(project_id, position, name) for position, name in enumerate(columns)],
            )

    async def list_fields(self, project_id: str) -> list[CustomFieldDefinition]:
        with self.transaction() as conn:
            rows = conn.execute(
                "SELECT id, data_json FROM custom_fields WHERE project_id = ? ORDER BY seq",
                (project_id,),
            ).fetchall()
        return [
            CustomFieldDefinition.model_validate({**json.loads(row["data_json"]), "id": row["id"]})
            for row in rows
        ]

    async def save_field(self, project_id: str, definition: CustomFieldDefinition) -> None:
        data = json.dumps(definition.model_dump(mode="json", exclude={"id"}))
        with self.transaction() as conn:
            conn.execute(
                """
                INSERT INTO custom_fields (id, project_id, data_json) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET data_json = excluded.data_json
                """,
                (definition.id, project_id, data),
            )

    async def delete_field(self, project_id: str, field_id: str) -> None:
        with self.transaction() as conn:
            conn.execute(
                "DELETE FROM custom_fields WHERE id = ? AND project_id = ?",
                (field_id, project_id),
            )

    def _snapshot(self, project_id: str) -> list[Scene]:
        with self.transaction() as conn:
            rows = conn.execute(
                "SELECT id, data_json FROM scenes WHERE project_id = ? ORDER BY seq",
                (project_id,),
            ).fetchall()
        return [self._row_to_scene(row) for row in rows]

    def _fetch(self, conn: sqlite3.Connection, project_id: str, scene_id: str) -> Scene:
        row = conn.execute(
            "SELECT id, data_json FROM scenes WHERE id = ? AND project_id = ?",
            (scene_id, project_id),
        ).fetchone()
        if row is None:
            raise SceneNotFoundError(project_id, scene_id)
        return self._row_to_scene(row)

    @staticmethod
    def _row_to_scene(row: sqlite3.Row) -> Scene:
        return Scene.model_validate({**json.loads(row["data_json"]), "id": row["id"]})
