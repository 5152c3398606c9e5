"""SQLite-backed persistent cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3. Keywords live in a join table so candidate lookup is an
indexed set-membership query; counters are updated with single-statement
``UPDATE ... SET n = n + 1`` so concurrent increments never lose writes.
"""

import json
import logging
import sqlite3
from pathlib import Path

from blueprint_hub.cache.store import BlueprintStore
from blueprint_hub.models.cache import CacheEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS blueprint_cache (
    id TEXT PRIMARY KEY,
    prompt_hash TEXT NOT NULL UNIQUE,
    prompt_original TEXT NOT NULL,
    prompt_normalized TEXT NOT NULL,
    keywords TEXT NOT NULL,
    blueprint TEXT NOT NULL,
    template_title TEXT NOT NULL,
    template_category TEXT NOT NULL,
    created_by TEXT,
    times_used INTEGER NOT NULL DEFAULT 0,
    successful_builds INTEGER NOT NULL DEFAULT 0,
    failed_builds INTEGER NOT NULL DEFAULT 0,
    avg_rating REAL NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS blueprint_cache_keywords (
    cache_id TEXT NOT NULL REFERENCES blueprint_cache(id) ON DELETE CASCADE,
    keyword TEXT NOT NULL,
    PRIMARY KEY (cache_id, keyword)
);
CREATE INDEX IF NOT EXISTS idx_cache_keyword ON blueprint_cache_keywords(keyword);
CREATE INDEX IF NOT EXISTS idx_cache_times_used ON blueprint_cache(times_used);
"""

_COLUMNS = (
    "id, prompt_hash, prompt_original, prompt_normalized, keywords, blueprint, "
    "template_title, template_category, created_by, times_used, successful_builds, "
    "failed_builds, avg_rating, created_at"
)


class SqliteBlueprintStore(BlueprintStore):
    """SQLite-backed blueprint cache store."""

    def __init__(self, db_path: Path | str) -> None:
        target = str(db_path)
        if target != ":memory:":
            path = Path(db_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            target = str(path)
        self._conn = sqlite3.connect(target, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(_SCHEMA)

    async def upsert(self, entry: CacheEntry, ignore_duplicates: bool = True) -> CacheEntry:
        params = {
            "id": entry.id,
            "prompt_hash": entry.prompt_hash,
            "prompt_original": entry.prompt_original,
            "prompt_normalized": entry.prompt_normalized,
            "keywords": json.dumps(sorted(entry.keywords)),
            "blueprint": entry.blueprint.model_dump_json(),
            "template_title": entry.template_title,
            "template_category": entry.template_category,
            "created_by": entry.created_by,
            "times_used": entry.times_used,
            "successful_builds": entry.successful_builds,
            "failed_builds": entry.failed_builds,
            "avg_rating": entry.avg_rating,
            "created_at": entry.created_at.isoformat(),
        }
        if ignore_duplicates:
            conflict = "DO NOTHING"
        else:
            conflict = (
                "DO UPDATE SET prompt_original = excluded.prompt_original, "
                "prompt_normalized = excluded.prompt_normalized, "
                "keywords = excluded.keywords, blueprint = excluded.blueprint, "
                "template_title = excluded.template_title, "
                "template_category = excluded.template_category"
            )
        with self._conn:
            self._conn.execute(
                f"INSERT INTO blueprint_cache ({_COLUMNS}) VALUES "
                "(:id, :prompt_hash, :prompt_original, :prompt_normalized, :keywords, "
                ":blueprint, :template_title, :template_category, :created_by, :times_used, "
                ":successful_builds, :failed_builds, :avg_rating, :created_at) "
                f"ON CONFLICT(prompt_hash) {conflict}",
                params,
            )
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM blueprint_cache WHERE prompt_hash = ?",
                (entry.prompt_hash,),
            ).fetchone()
            stored_id = row["id"]
            if not ignore_duplicates:
                self._conn.execute(
                    "DELETE FROM blueprint_cache_keywords WHERE cache_id = ?", (stored_id,)
                )
            self._conn.executemany(
                "INSERT OR IGNORE INTO blueprint_cache_keywords (cache_id, keyword) VALUES (?, ?)",
                [(stored_id, kw) for kw in json.loads(row["keywords"])],
            )
        return self._row_to_entry(row)

    async def get_by_hash(self, prompt_hash: str) -> CacheEntry | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM blueprint_cache WHERE prompt_hash = ?", (prompt_hash,)
        ).fetchone()
        return self._row_to_entry(row) if row else None

    async def find_by_keywords(self, keywords: set[str], limit: int = 10) -> list[CacheEntry]:
        if not keywords:
            return []
        ordered = sorted(keywords)
        placeholders = ", ".join("?" for _ in ordered)
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM blueprint_cache WHERE id IN ("
            f"SELECT cache_id FROM blueprint_cache_keywords WHERE keyword IN ({placeholders})"
            ") ORDER BY times_used DESC, rowid ASC LIMIT ?",
            (*ordered, limit),
        )
        entries: list[CacheEntry] = []
        for row in cursor.fetchall():
            try:
                entries.append(self._row_to_entry(row))
            except ValueError as e:
                logger.warning("Skipping unreadable cache entry %s: %s", row["id"], e)
        return entries

    async def increment_usage(self, cache_id: str) -> None:
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE blueprint_cache SET times_used = times_used + 1 WHERE id = ?",
                (cache_id,),
            )
        if cursor.rowcount == 0:
            raise KeyError(f"No cache entry with id {cache_id}")

    async def record_build(self, cache_id: str, success: bool) -> None:
        column = "successful_builds" if success else "failed_builds"
        with self._conn:
            cursor = self._conn.execute(
                f"UPDATE blueprint_cache SET {column} = {column} + 1 WHERE id = ?",
                (cache_id,),
            )
        if cursor.rowcount == 0:
            raise KeyError(f"No cache entry with id {cache_id}")

    async def list_entries(self) -> list[CacheEntry]:
        cursor = self._conn.execute(f"SELECT {_COLUMNS} FROM blueprint_cache ORDER BY rowid")
        return [self._row_to_entry(row) for row in cursor.fetchall()]

    async def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> CacheEntry:
        data = dict(row)
        data["keywords"] = json.loads(data["keywords"])
        data["blueprint"] = json.loads(data["blueprint"])
        return CacheEntry.model_validate(data)
