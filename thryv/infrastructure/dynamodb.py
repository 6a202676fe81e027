"""DynamoDB Adapter — KeyValueTable implementation over aioboto3.

Invariants:
    - One aioboto3 resource per process, opened in lifespan and closed on shutdown
    - Every botocore failure maps to StoreUnavailableError (no retries here beyond
      botocore's own), except an invalid ExclusiveStartKey which maps to BadCursorError
    - scan() passes `Limit` straight through: DynamoDB applies it before the filter

Design Decisions:
    - Resource API + boto3.dynamodb.conditions: native Python types in and out,
      no manual attribute-value marshalling
    - query_index follows LastEvaluatedKey until exhausted; the identification
      index holds at most a handful of items per value
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, AsyncGenerator

import aioboto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from thryv.core.errors import BadCursorError, StoreUnavailableError
from thryv.core.repository_protocols import KeyValueTable, ScanFilter, ScanPage

logger = logging.getLogger(__name__)

STORE_NAME = "dynamodb"


def build_filter_expression(scan_filter: ScanFilter | None):
    """Translate a store-neutral ScanFilter into a boto3 ConditionBase (or None)."""
    if scan_filter is None:
        return None
    condition = None
    for name in scan_filter.absent:
        part = Attr(name).not_exists()
        condition = part if condition is None else condition & part
    for name, value in scan_filter.equals.items():
        part = Attr(name).eq(value)
        condition = part if condition is None else condition & part
    return condition


def _store_error(e: Exception, operation: str) -> StoreUnavailableError:
    if isinstance(e, ClientError):
        code = e.response.get("Error", {}).get("Code", "Unknown")
        message = f"{code}"
    else:
        message = type(e).__name__
    logger.error(
        f"DynamoDB {operation} failed: {e}",
        extra={"store": STORE_NAME, "operation": operation},
    )
    return StoreUnavailableError(message, STORE_NAME, operation)


class DynamoTable:
    """KeyValueTable backed by a DynamoDB table resource."""

    def __init__(self, table: Any):
        self._table = table

    async def get_item(self, key: dict[str, Any]) -> dict[str, Any] | None:
        try:
            response = await self._table.get_item(Key=key, ConsistentRead=True)
        except (ClientError, BotoCoreError) as e:
            raise _store_error(e, "get_item") from e
        return response.get("Item")

    async def put_item(self, item: dict[str, Any]) -> None:
        try:
            await self._table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            raise _store_error(e, "put_item") from e

    async def scan(
        self,
        limit: int,
        exclusive_start_key: dict[str, Any] | None = None,
        scan_filter: ScanFilter | None = None,
    ) -> ScanPage:
        kwargs: dict[str, Any] = {"Limit": limit}
        if exclusive_start_key:
            kwargs["ExclusiveStartKey"] = exclusive_start_key
        expression = build_filter_expression(scan_filter)
        if expression is not None:
            kwargs["FilterExpression"] = expression
        try:
            response = await self._table.scan(**kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if exclusive_start_key and code == "ValidationException":
                raise BadCursorError("starting key rejected by store") from e
            raise _store_error(e, "scan") from e
        except BotoCoreError as e:
            raise _store_error(e, "scan") from e
        return ScanPage(
            items=response.get("Items", []),
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    async def query_index(
        self, index_name: str, attribute: str, value: Any,
    ) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": Key(attribute).eq(value),
        }
        try:
            while True:
                response = await self._table.query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise _store_error(e, "query") from e

    async def delete_item(self, key: dict[str, Any]) -> None:
        try:
            await self._table.delete_item(Key=key)
        except (ClientError, BotoCoreError) as e:
            raise _store_error(e, "delete_item") from e


class DynamoDBManager:
    """Owns the aioboto3 session/resource for the process lifetime."""

    def __init__(
        self,
        region_name: str,
        endpoint_url: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
    ):
        self._session = aioboto3.Session(
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region_name,
        )
        self._endpoint_url = endpoint_url
        self._stack = AsyncExitStack()
        self._resource: Any = None

    async def start(self) -> None:
        self._resource = await self._stack.enter_async_context(
            self._session.resource("dynamodb", endpoint_url=self._endpoint_url),
        )

    async def close(self) -> None:
        await self._stack.aclose()
        self._resource = None

    async def table(self, name: str) -> DynamoTable:
        if self._resource is None:
            raise RuntimeError("DynamoDB resource not started")
        return DynamoTable(await self._resource.Table(name))

    async def health_check(self, table_name: str) -> bool:
        """Check table reachability (for readiness probes)."""
        if self._resource is None:
            return False
        try:
            await self._resource.meta.client.describe_table(TableName=table_name)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB health check failed: {e}", extra={"store": STORE_NAME})
            return False


# Singleton (initialized on startup)
kv_manager: DynamoDBManager | None = None
company_table_name: str = "company-table"


async def init_kv(table_name: str, **kwargs) -> None:
    global kv_manager, company_table_name
    kv_manager = DynamoDBManager(**kwargs)
    company_table_name = table_name
    await kv_manager.start()


async def close_kv() -> None:
    global kv_manager
    if kv_manager:
        await kv_manager.close()
        kv_manager = None


async def get_company_table() -> AsyncGenerator[KeyValueTable, None]:
    """FastAPI dependency for the company key-value table."""
    if not kv_manager:
        raise RuntimeError("Key-value store not initialized")
    yield await kv_manager.table(company_table_name)
