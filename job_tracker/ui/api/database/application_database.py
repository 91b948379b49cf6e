"""SQLite database for tracked job applications"""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List, Dict, Any
from contextlib import contextmanager
import logging

from job_tracker.exceptions import StorageError
from job_tracker.insights.models import (
    ApplicationRecord,
    ApplicationStatus,
    DEFAULT_RESUME_VERSION,
    DEFAULT_SOURCE,
)
from job_tracker.insights.store import ApplicationStore

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_iso(value: Any) -> str:
    # Stored in UTC so ORDER BY applied_at sorts chronologically
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    return str(value)


class ApplicationDatabase(ApplicationStore):
    """SQLite database manager for job applications"""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else Path("data/applications.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    @contextmanager
    def get_connection(self):
        """Get database connection with automatic cleanup"""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            logger.error(f"Could not open database {self.db_path}: {e}")
            raise StorageError(f"Could not open database: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self):
        """Initialize database schema"""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("SELECT version FROM schema_version")
            row = cursor.fetchone()
            current_version = row[0] if row else 0

            if current_version < self.SCHEMA_VERSION:
                self._create_schema(cursor)
                cursor.execute("DELETE FROM schema_version")
                cursor.execute("INSERT INTO schema_version (version) VALUES (?)",
                               (self.SCHEMA_VERSION,))
                logger.info(f"Database schema updated to version {self.SCHEMA_VERSION}")

    def _create_schema(self, cursor):
        """Create all database tables"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS applications (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                company TEXT NOT NULL,
                role TEXT NOT NULL,
                status TEXT DEFAULT 'Applied',
                source TEXT,
                resume_version TEXT,
                applied_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_applications_status ON applications(status)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_applications_applied ON applications(applied_at DESC)")

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ApplicationRecord:
        data = dict(row)
        # Rows written by hand may carry NULLs where the API always sets a value
        data["status"] = data.get("status") or ApplicationStatus.APPLIED.value
        data["source"] = data.get("source") or DEFAULT_SOURCE
        data["resume_version"] = data.get("resume_version") or DEFAULT_RESUME_VERSION
        return ApplicationRecord(**data)

    # ============== Application Operations ==============

    def create_application(self, application_data: Dict) -> ApplicationRecord:
        """Insert a new application, filling storage defaults"""
        role = application_data.get("role") or application_data.get("position")

        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO applications (company, role, status, source, resume_version, applied_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                application_data["company"],
                role,
                application_data.get("status") or ApplicationStatus.APPLIED.value,
                application_data.get("source") or DEFAULT_SOURCE,
                application_data.get("resume_version") or DEFAULT_RESUME_VERSION,
                _to_iso(application_data.get("applied_at") or _utc_now_iso()),
            ))
            app_id = cursor.lastrowid

        logger.info(f"Created application {app_id} for {application_data['company']}")
        return self.get_application(app_id)

    def get_application(self, app_id: int) -> Optional[ApplicationRecord]:
        """Get application by ID"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM applications WHERE id = ?", (app_id,))
            row = cursor.fetchone()
            return self._row_to_record(row) if row else None

    def fetch_all(self) -> List[ApplicationRecord]:
        """Get all applications, newest first"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM applications ORDER BY applied_at DESC, id DESC")
            return [self._row_to_record(r) for r in cursor.fetchall()]

    def update_application(self, app_id: int, application_data: Dict) -> Optional[ApplicationRecord]:
        """Replace every field of an application"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE applications SET
                    company = ?,
                    role = ?,
                    status = ?,
                    source = ?,
                    resume_version = ?,
                    applied_at = ?
                WHERE id = ?
            """, (
                application_data["company"],
                application_data.get("role") or application_data.get("position"),
                application_data["status"],
                application_data["source"],
                application_data["resume_version"],
                _to_iso(application_data["applied_at"]),
                app_id,
            ))
            if cursor.rowcount == 0:
                return None

        return self.get_application(app_id)

    def update_application_status(self, app_id: int, status: str) -> Optional[ApplicationRecord]:
        """Update only the status of an application"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE applications SET status = ? WHERE id = ?",
                (status, app_id)
            )
            if cursor.rowcount == 0:
                return None

        return self.get_application(app_id)

    def delete_application(self, app_id: int) -> bool:
        """Delete an application"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM applications WHERE id = ?", (app_id,))
            return cursor.rowcount > 0

    def count(self) -> int:
        """Number of tracked applications"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM applications")
            return cursor.fetchone()[0]


# Default instance for the HTTP and CLI layers
_db_instance: Optional[ApplicationDatabase] = None


def get_application_database(db_path: Optional[Path] = None) -> ApplicationDatabase:
    """Get or create database instance"""
    global _db_instance
    if _db_instance is None:
        if db_path is None:
            from config.settings import settings
            db_path = settings.database_path
        _db_instance = ApplicationDatabase(db_path)
    return _db_instance
