from __future__ import annotations

import logging
import time
from typing import Any

import requests

from bizmetrics.config.env import SupabaseConfig, get_supabase_config
from bizmetrics.errors import DataStoreError

logger = logging.getLogger(__name__)


class SupabaseStore:
    """
    Thin client for the hosted Supabase REST (PostgREST) API.

    Only what the console needs: bulk reads, counts, one sorted/filtered page,
    and inserts. Every failure surfaces as DataStoreError so pages can fall back
    to sample data.
    """

    def __init__(self, config: SupabaseConfig | None = None, session: requests.Session | None = None):
        self.config = config or get_supabase_config()
        self.session = session or requests.Session()

    # ---------- plumbing ----------

    def _table_url(self, table: str) -> str:
        return f"{self.config.url.rstrip('/')}/rest/v1/{table}"

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.config.anon_key or "",
            "Authorization": f"Bearer {self.config.anon_key or ''}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        if not self.config.configured:
            raise DataStoreError("Supabase is not configured (set SUPABASE_URL and SUPABASE_ANON_KEY)")

        url = self._table_url(table)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.config.timeout_s,
            )
        except requests.RequestException as exc:
            raise DataStoreError(f"Supabase request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise DataStoreError(_error_message(resp), status=resp.status_code)
        return resp

    # ---------- queries ----------

    def fetch_rows(self, table: str, columns: str = "*") -> list[dict[str, Any]]:
        resp = self._request("GET", table, params={"select": columns})
        rows = resp.json()
        logger.info("Fetched %d rows from %s", len(rows), table)
        return rows

    def count_rows(self, table: str, ilike: tuple[str, str] | None = None) -> int:
        params: dict[str, Any] = {"select": "*"}
        if ilike:
            params[ilike[0]] = f"ilike.*{ilike[1]}*"
        resp = self._request("HEAD", table, params=params, headers={"Prefer": "count=exact"})
        return parse_content_range_total(resp.headers.get("Content-Range"))

    def query_page(
        self,
        table: str,
        order_by: str,
        ascending: bool = True,
        offset: int = 0,
        limit: int = 10,
        ilike: tuple[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        # Column names contain spaces ("Order Category"), so they are quoted
        params: dict[str, Any] = {
            "select": "*",
            "order": f'"{order_by}".{"asc" if ascending else "desc"}',
            "offset": offset,
            "limit": limit,
        }
        if ilike:
            params[ilike[0]] = f"ilike.*{ilike[1]}*"
        return self._request("GET", table, params=params).json()

    def insert_rows(self, table: str, rows: list[dict[str, Any]]) -> None:
        self._request("POST", table, json=rows, headers={"Prefer": "return=minimal"})
        logger.info("Inserted %d rows into %s", len(rows), table)

    def check_connection(self, table: str) -> dict[str, Any]:
        """One-row read used by the Raw Data page's connection banner."""
        start = time.perf_counter()
        try:
            self._request("GET", table, params={"select": "*", "limit": 1})
        except DataStoreError as exc:
            logger.warning("Supabase connection test failed: %s", exc)
            return {"success": False, "error": str(exc), "latency_ms": None, "url": self.config.url}
        latency_ms = (time.perf_counter() - start) * 1000.0
        logger.info("Supabase connection ok (%.0f ms)", latency_ms)
        return {"success": True, "error": None, "latency_ms": latency_ms, "url": self.config.url}


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text[:200]}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"


def parse_content_range_total(header: str | None) -> int:
    # "0-9/123" or "*/0"; an unknown total ("0-9/*") counts as 0
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0
