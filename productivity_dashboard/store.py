"""Log store backends."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx
from postgrest.exceptions import APIError
from supabase import SupabaseException, create_client

from productivity_dashboard.adapters import json_adapter
from productivity_dashboard.errors import StoreUnavailable
from productivity_dashboard.schema import ProductivityLog

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "productivity_logs"


class LogStore(Protocol):
    def list_logs(self) -> list[ProductivityLog]: ...

    def append_log(self, log: ProductivityLog) -> None: ...


class InMemoryLogStore:
    def __init__(self, logs: Optional[list[ProductivityLog]] = None) -> None:
        self._logs: list[ProductivityLog] = list(logs or [])

    def list_logs(self) -> list[ProductivityLog]:
        return list(self._logs)

    def append_log(self, log: ProductivityLog) -> None:
        self._logs.append(log)


class JsonFileLogStore:
    """Logs kept in a local JSON array file."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def list_logs(self) -> list[ProductivityLog]:
        if not self.path.exists():
            return []
        try:
            return json_adapter.parse(str(self.path))
        except (OSError, ValueError) as exc:
            raise StoreUnavailable(f"Could not read {self.path}: {exc}") from exc

    def append_log(self, log: ProductivityLog) -> None:
        logs = self.list_logs()
        logs.append(log)
        try:
            json_adapter.dump(logs, str(self.path))
        except OSError as exc:
            raise StoreUnavailable(f"Could not write {self.path}: {exc}") from exc


class SupabaseLogStore:
    """Hosted Postgres table reached through the Supabase client."""

    def __init__(self, url: str, api_key: str, table: str = DEFAULT_TABLE, client: Any = None) -> None:
        self.url = url
        self.api_key = api_key
        self.table = table
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = create_client(self.url, self.api_key)
            except SupabaseException as exc:
                raise StoreUnavailable(f"Could not connect to Supabase at {self.url}: {exc}") from exc
        return self._client

    def list_logs(self) -> list[ProductivityLog]:
        query = self._get_client().table(self.table).select("*").order("date", desc=True)
        try:
            result = query.execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreUnavailable(f"Could not load logs from {self.table}: {exc}") from exc
        return [ProductivityLog.from_record(row) for row in result.data or []]

    def append_log(self, log: ProductivityLog) -> None:
        row = log.to_record()
        row["blockers"] = row["blockers"] or None
        row["tasks_carried_over"] = row["tasks_carried_over"] or None
        try:
            self._get_client().table(self.table).insert(row).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreUnavailable(f"Could not save log {log.id} to {self.table}: {exc}") from exc
        logger.debug("Inserted log %s for %s", log.id, log.employee_name)
