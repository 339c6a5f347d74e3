"""Redis registry of query executions launched for a custom report type."""

import json
import logging
from typing import Any

import redis.asyncio as redis

from app.core.config_file import get_settings
from app.core.redis import get_redis_client

logger = logging.getLogger(__name__)


class QueryExecutionRegistry:
    """Remembers which custom report type launched a query execution.

    A result fetch is only served while the key written at launch time is
    still alive. The key holds the rows of the execution as JSON.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int | None = None):
        self.client = client
        self.ttl_seconds = ttl_seconds or get_settings().QUERY_EXECUTION_TTL_SECONDS

    @staticmethod
    def key(custom_report_type_id: str, query_execution_id: str) -> str:
        return f"{custom_report_type_id} - {query_execution_id}"

    async def save(
        self,
        custom_report_type_id: str,
        query_execution_id: str,
        rows: list[dict[str, Any]] | None = None,
    ) -> None:
        key = self.key(custom_report_type_id, query_execution_id)
        value = json.dumps(rows, default=str) if rows is not None else ""
        await self.client.set(key, value, ex=self.ttl_seconds)
        logger.debug(f"Registered query execution '{key}' for {self.ttl_seconds}s")

    async def is_valid(self, custom_report_type_id: str, query_execution_id: str) -> bool:
        """Return whether the execution belongs to the custom report type and has not expired."""
        key = self.key(custom_report_type_id, query_execution_id)
        return bool(await self.client.exists(key))

    async def load_rows(self, custom_report_type_id: str, query_execution_id: str) -> list[dict[str, Any]] | None:
        """Rows stored for the execution, or None when the key is gone."""
        value = await self.client.get(self.key(custom_report_type_id, query_execution_id))
        if value is None:
            return None
        return json.loads(value) if value else []


async def get_query_execution_registry() -> QueryExecutionRegistry:
    """Dependency to get the registry bound to the shared Redis client."""
    return QueryExecutionRegistry(await get_redis_client())
