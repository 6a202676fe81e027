"""Provision the company table and its identification index (idempotent).

Usage:
    python -m scripts.init_dynamodb

Reads the same settings as the API (DYNAMODB_ENDPOINT, DYNAMODB_TABLE_COMPANY, ...).
"""

import asyncio
import logging

import aioboto3

from thryv.config import get_settings
from thryv.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

THROUGHPUT = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}


def company_table_definition(table_name: str, index_name: str) -> dict:
    return {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
        "AttributeDefinitions": [
            {"AttributeName": "id", "AttributeType": "S"},
            {"AttributeName": "identification", "AttributeType": "S"},
        ],
        "ProvisionedThroughput": THROUGHPUT,
        "GlobalSecondaryIndexes": [
            {
                "IndexName": index_name,
                "KeySchema": [{"AttributeName": "identification", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
                "ProvisionedThroughput": THROUGHPUT,
            },
        ],
    }


async def init_company_table() -> bool:
    """Create the table if missing. Returns True when it was created."""
    settings = get_settings()
    session = aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.dynamodb_region,
    )
    async with session.client(
        "dynamodb", endpoint_url=settings.dynamodb_endpoint,
    ) as client:
        existing = (await client.list_tables()).get("TableNames", [])
        if settings.dynamodb_table_company in existing:
            logger.info(f"Table {settings.dynamodb_table_company} already exists")
            return False
        await client.create_table(**company_table_definition(
            settings.dynamodb_table_company, settings.company_identification_index,
        ))
        waiter = client.get_waiter("table_exists")
        await waiter.wait(TableName=settings.dynamodb_table_company)
        logger.info(f"Table {settings.dynamodb_table_company} created")
        return True


if __name__ == "__main__":
    setup_logging("INFO", "text")
    asyncio.run(init_company_table())
