"""
DynamoDB Table: bookings

Primary Key (composite):
  - id (HASH)        # booking UUID
  - clientId (RANGE) # partition co-key, required alongside id

Global Secondary Indexes (projection ALL):
  - ProviderIndex: providerUserSub (HASH), id (RANGE)
  - ClientIndex:   clientId (HASH), id (RANGE)

Attributes:
  - providerUserSub (string)
  - timeslotId (string)
  - serviceId (string)
  - status (string)   # "pending" | "confirmed" | "cancelled" | "completed"
  - notes (string, optional)
  - createdAt (ISO8601)
  - updatedAt (ISO8601)
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from booking_service.errors import StoreError

logger = logging.getLogger(__name__)

PROVIDER_INDEX = "ProviderIndex"
CLIENT_INDEX = "ClientIndex"

ATTRIBUTE_DEFINITIONS = [
    {"AttributeName": "id", "AttributeType": "S"},
    {"AttributeName": "clientId", "AttributeType": "S"},
    {"AttributeName": "providerUserSub", "AttributeType": "S"},
]

GLOBAL_SECONDARY_INDEXES = [
    {
        "IndexName": PROVIDER_INDEX,
        "KeySchema": [
            {"AttributeName": "providerUserSub", "KeyType": "HASH"},
            {"AttributeName": "id", "KeyType": "RANGE"},
        ],
        "Projection": {"ProjectionType": "ALL"},
    },
    {
        "IndexName": CLIENT_INDEX,
        "KeySchema": [
            {"AttributeName": "clientId", "KeyType": "HASH"},
            {"AttributeName": "id", "KeyType": "RANGE"},
        ],
        "Projection": {"ProjectionType": "ALL"},
    },
]


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class BookingDB:
    def __init__(self, table_name: str = "bookings", region_name: str = "us-east-1",
                 endpoint_url: Optional[str] = None):
        self.table_name = table_name
        self.resource = boto3.resource("dynamodb", region_name=region_name, endpoint_url=endpoint_url)
        self.table = self.resource.Table(table_name)

    # ---------- Table bootstrap ----------
    def ensure_table(self) -> None:
        """
        Create the bookings table with its indexes, or add any missing index
        to an existing table.

        Raises:
            ClientError: If table creation fails for a reason other than the
                table already existing.
        """
        try:
            logger.info("Creating bookings table", extra={"table": self.table_name})
            self.resource.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {"AttributeName": "id", "KeyType": "HASH"},
                    {"AttributeName": "clientId", "KeyType": "RANGE"},
                ],
                AttributeDefinitions=ATTRIBUTE_DEFINITIONS,
                GlobalSecondaryIndexes=GLOBAL_SECONDARY_INDEXES,
                BillingMode="PAY_PER_REQUEST",
            )
            logger.info("Bookings table created", extra={"table": self.table_name})
        except ClientError as e:
            if _error_code(e) != "ResourceInUseException":
                raise
            logger.info("Bookings table already exists", extra={"table": self.table_name})
            try:
                self._ensure_indexes()
            except (ClientError, BotoCoreError) as update_error:
                logger.error("Error updating GSIs", extra={"error": str(update_error)})

    def _ensure_indexes(self) -> None:
        client = self.resource.meta.client
        for index in GLOBAL_SECONDARY_INDEXES:
            try:
                client.update_table(
                    TableName=self.table_name,
                    AttributeDefinitions=ATTRIBUTE_DEFINITIONS,
                    GlobalSecondaryIndexUpdates=[{"Create": index}],
                )
                logger.info(f"GSI {index['IndexName']} created")
            except ClientError as e:
                code = _error_code(e)
                message = e.response.get("Error", {}).get("Message", "")
                if code == "ResourceInUseException" or (
                    code == "ValidationException" and "already exists" in message
                ):
                    logger.info(f"GSI {index['IndexName']} already exists")
                else:
                    raise

    # ---------- Writes ----------
    def put_booking(self, item: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to write booking: {e}") from e
        return item

    def update_status(self, booking_id: str, client_id: str, status: str,
                      updated_at: str) -> Dict[str, Any]:
        """Set status and updatedAt, returning all new attribute values."""
        try:
            resp = self.table.update_item(
                Key={"id": booking_id, "clientId": client_id},
                UpdateExpression="SET #status = :status, updatedAt = :updatedAt",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={":status": status, ":updatedAt": updated_at},
                ReturnValues="ALL_NEW",
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to update booking status: {e}") from e
        return resp.get("Attributes", {})

    # ---------- Reads ----------
    def get_booking(self, booking_id: str, client_id: str) -> Optional[Dict[str, Any]]:
        try:
            resp = self.table.get_item(Key={"id": booking_id, "clientId": client_id})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to read booking: {e}") from e
        return resp.get("Item")

    def query_by_provider(self, provider_user_sub: str) -> List[Dict[str, Any]]:
        return self._query_index(PROVIDER_INDEX, Key("providerUserSub").eq(provider_user_sub))

    def query_by_client(self, client_id: str) -> List[Dict[str, Any]]:
        return self._query_index(CLIENT_INDEX, Key("clientId").eq(client_id))

    # ---------- Internal helper ----------
    def _query_index(self, index_name: str, condition) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {"IndexName": index_name, "KeyConditionExpression": condition}
        try:
            while True:
                resp = self.table.query(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to query {index_name}: {e}") from e
        return items
