"""DynamoDB settings record store.

Table schema:
- Partition Key: user_id (S)
- Attributes: onboarded (BOOL), settings_json (S, JSON document or absent),
  created_at (S, ISO 8601), updated_at (S, ISO 8601)

The preference bag is stored as a JSON string so arbitrary nested values
round-trip without DynamoDB number/Decimal conversion.
"""

import asyncio
import json
from datetime import datetime
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

import structlog
from infrastructure.operations import OperationResult
from infrastructure.persistence.store import Row, SettingsRecordStore

logger = structlog.get_logger()

PARTITION_KEY = "user_id"

THROTTLING_ERRS = (
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "ProvisionedThroughputExceededException",
)

VALIDATION_ERRS = (
    "ValidationException",
    "SerializationException",
    "ItemCollectionSizeLimitExceededException",
)


def classify_dynamodb_error(exc: Exception) -> OperationResult:
    """Classify boto3/botocore errors into OperationResult.

    Error Code Mapping:
    - ResourceNotFoundException: table missing -> NOT_FOUND
    - ConditionalCheckFailedException: key condition failed -> CONFLICT
    - Throttling family: -> TRANSIENT_ERROR
    - Validation family: -> PERMANENT_ERROR
    - Other ClientError: -> TRANSIENT_ERROR (AWS convention)
    - Non-ClientError (connection, timeout): -> TRANSIENT_ERROR
    """
    if not isinstance(exc, ClientError):
        return OperationResult.transient_error(
            f"DynamoDB connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    error_code = exc.response.get("Error", {}).get("Code", "Unknown")
    error_message = exc.response.get("Error", {}).get("Message", str(exc))

    if error_code == "ResourceNotFoundException":
        return OperationResult.relation_absent(error_message)

    if error_code == "ConditionalCheckFailedException":
        return OperationResult.conflict(error_message, error_code=error_code)

    if error_code in THROTTLING_ERRS:
        return OperationResult.transient_error(
            "DynamoDB request throttled", error_code="RATE_LIMITED"
        )

    if error_code in VALIDATION_ERRS:
        return OperationResult.permanent_error(
            f"DynamoDB rejected request: {error_message}", error_code=error_code
        )

    return OperationResult.transient_error(
        f"DynamoDB client error: {error_code}", error_code=error_code
    )


def _serialize_value(name: str, value: Any) -> Dict[str, Any]:
    if name == "settings_json":
        return {"NULL": True} if value is None else {"S": json.dumps(value)}
    if isinstance(value, bool):
        return {"BOOL": value}
    if isinstance(value, datetime):
        return {"S": value.isoformat()}
    return {"S": str(value)}


def _to_item(row: Row) -> Dict[str, Any]:
    return {name: _serialize_value(name, value) for name, value in row.items()}


def _serialization_error(exc: Exception) -> OperationResult:
    return OperationResult.permanent_error(
        f"Cannot serialize settings row: {exc}", error_code="SERIALIZATION_ERROR"
    )


def _from_item(item: Optional[Dict[str, Any]]) -> Optional[Row]:
    if not item:
        return None

    settings_attr = item.get("settings_json", {"NULL": True})
    settings_json = None if "NULL" in settings_attr else json.loads(settings_attr["S"])

    row: Row = {
        "user_id": item[PARTITION_KEY]["S"],
        "onboarded": item.get("onboarded", {}).get("BOOL", False),
        "settings_json": settings_json,
    }
    for stamp in ("created_at", "updated_at"):
        if stamp in item:
            row[stamp] = datetime.fromisoformat(item[stamp]["S"])
    return row


class DynamoDBSettingsRecordStore(SettingsRecordStore):
    """DynamoDB-backed settings record store.

    boto3 is synchronous, so each call runs in a worker thread to keep the
    event loop free. Inserts are conditional on the key being absent,
    which is what makes get-or-create safe under concurrent first contact.
    """

    def __init__(
        self,
        table_name: str = "user_settings",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize DynamoDB store.

        Args:
            table_name: DynamoDB table name.
            region_name: AWS region for the default client.
            endpoint_url: Optional endpoint override (local DynamoDB).
            client: Optional pre-built boto3 DynamoDB client.
        """
        self.table_name = table_name
        self._client = client or boto3.client(
            "dynamodb", region_name=region_name, endpoint_url=endpoint_url
        )
        logger.info(
            "initialized_dynamodb_settings_store",
            table_name=table_name,
            region=region_name,
        )

    async def _call(self, method: str, **kwargs) -> OperationResult:
        try:
            response = await asyncio.to_thread(
                getattr(self._client, method), TableName=self.table_name, **kwargs
            )
        except Exception as e:  # classified into a structured result
            result = classify_dynamodb_error(e)
            logger.warning(
                "dynamodb_settings_call_failed",
                method=method,
                status=result.status.value,
                error_code=result.error_code,
            )
            return result
        return OperationResult.success(data=response)

    async def select_by_user_id(self, user_id: str) -> OperationResult:
        result = await self._call(
            "get_item",
            Key={PARTITION_KEY: {"S": user_id}},
            ConsistentRead=True,
        )
        if not result.is_success:
            return result
        return OperationResult.success(data=_from_item(result.data.get("Item")))

    async def insert(self, row: Row) -> OperationResult:
        try:
            item = _to_item(row)
        except (TypeError, ValueError) as e:
            return _serialization_error(e)

        result = await self._call(
            "put_item",
            Item=item,
            ConditionExpression="attribute_not_exists(#pk)",
            ExpressionAttributeNames={"#pk": PARTITION_KEY},
        )
        if not result.is_success:
            return result
        return OperationResult.success(data=dict(row))

    async def update(self, user_id: str, changes: Row) -> OperationResult:
        names = {"#pk": PARTITION_KEY}
        values = {}
        assignments = []
        try:
            for index, (name, value) in enumerate(changes.items()):
                names[f"#f{index}"] = name
                values[f":v{index}"] = _serialize_value(name, value)
                assignments.append(f"#f{index} = :v{index}")
        except (TypeError, ValueError) as e:
            return _serialization_error(e)

        result = await self._call(
            "update_item",
            Key={PARTITION_KEY: {"S": user_id}},
            UpdateExpression="SET " + ", ".join(assignments),
            ConditionExpression="attribute_exists(#pk)",
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
            ReturnValues="ALL_NEW",
        )
        if result.is_conflict:
            # attribute_exists failed: no row for this user
            return OperationResult.success(data=None, message="no row matched")
        if not result.is_success:
            return result
        return OperationResult.success(data=_from_item(result.data.get("Attributes")))
