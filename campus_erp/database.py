"""
DynamoDB document store.

One `DocumentStore` is built per process in the FastAPI lifespan (see
`campus_erp/main.py`) and handed to routers through the `get_store`
dependency. Every method takes a `Table` from `campus_erp.tables` and works
with plain dicts. Floats are written as Decimal and numbers read back as int
or float, so callers never see Decimal.

Errors:
- `ConditionFailed` when a conditional write is rejected by DynamoDB
- `DependencyFailure` for any other AWS error, with the raw message as details
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request

from campus_erp.config.settings import Settings
from campus_erp.errors import DependencyFailure
from campus_erp.tables import Table

logger = logging.getLogger(__name__)


class ConditionFailed(Exception):
    """A conditional write found existing state that violates its condition."""


def to_dynamo(value: Any) -> Any:
    """Convert floats (unsupported by boto3) to Decimal, recursively."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Convert boto3 Decimals back to int or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Mapping):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {from_dynamo(v) for v in value}
    return value


@contextmanager
def _translate_errors(operation: str, table: Table):
    try:
        yield
    except ClientError as e:
        error = e.response.get('Error', {})
        if error.get('Code') == 'ConditionalCheckFailedException':
            raise ConditionFailed(error.get('Message') or operation) from e
        raise DependencyFailure(f"Error during {operation} on {table.name}", error.get('Message') or str(e)) from e
    except BotoCoreError as e:
        raise DependencyFailure(f"Error during {operation} on {table.name}", str(e)) from e


class DocumentStore:
    """Thin typed facade over the boto3 DynamoDB resource API."""

    def __init__(self, resource, table_prefix: str = ""):
        self._resource = resource
        self._table_prefix = table_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        boto3_config = Config(
            region_name=settings.AWS_REGION,
            retries={'max_attempts': settings.AWS_MAX_ATTEMPTS, 'mode': 'adaptive'},
            read_timeout=settings.AWS_READ_TIMEOUT,
            connect_timeout=settings.AWS_CONNECT_TIMEOUT,
        )
        kwargs: Dict[str, Any] = {'config': boto3_config}
        if settings.DYNAMODB_ENDPOINT_URL:
            kwargs['endpoint_url'] = settings.DYNAMODB_ENDPOINT_URL

        # Inside Lambda the execution role provides credentials
        is_lambda_env = os.getenv('AWS_LAMBDA_FUNCTION_NAME') is not None
        if not is_lambda_env and settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            kwargs['aws_access_key_id'] = settings.AWS_ACCESS_KEY_ID
            kwargs['aws_secret_access_key'] = settings.AWS_SECRET_ACCESS_KEY

        resource = boto3.resource('dynamodb', **kwargs)
        logger.info(f"DynamoDB resource initialized (region={settings.AWS_REGION}, endpoint={settings.DYNAMODB_ENDPOINT_URL or 'default'})")
        return cls(resource, table_prefix=settings.DYNAMODB_TABLE_PREFIX)

    def close(self) -> None:
        self._resource.meta.client.close()

    def _table(self, table: Table):
        return self._resource.Table(f"{self._table_prefix}{table.name}")

    def get(self, table: Table, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        with _translate_errors("get", table):
            response = self._table(table).get_item(Key=dict(key))
        item = response.get('Item')
        return from_dynamo(item) if item is not None else None

    def query(
        self,
        table: Table,
        partition_value: Any,
        sort_prefix: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        condition = Key(table.partition_key).eq(partition_value)
        if sort_prefix is not None:
            if table.sort_key is None:
                raise ValueError(f"{table.name} has no sort key to match a prefix against")
            condition = condition & Key(table.sort_key).begins_with(sort_prefix)

        params: Dict[str, Any] = {
            'KeyConditionExpression': condition,
            'ScanIndexForward': not descending,
        }
        items: List[Dict[str, Any]] = []
        with _translate_errors("query", table):
            while True:
                response = self._table(table).query(**params)
                items.extend(from_dynamo(item) for item in response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                params['ExclusiveStartKey'] = last_key
        return items

    def scan(self, table: Table, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if filters:
            condition = None
            for name, value in filters.items():
                clause = Attr(name).eq(value)
                condition = clause if condition is None else condition & clause
            params['FilterExpression'] = condition

        items: List[Dict[str, Any]] = []
        with _translate_errors("scan", table):
            while True:
                response = self._table(table).scan(**params)
                items.extend(from_dynamo(item) for item in response.get('Items', []))
                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                params['ExclusiveStartKey'] = last_key
        return items

    def put(self, table: Table, item: Mapping[str, Any], if_absent: bool = False) -> None:
        params: Dict[str, Any] = {'Item': to_dynamo(dict(item))}
        if if_absent:
            condition = Attr(table.partition_key).not_exists()
            if table.sort_key is not None:
                condition = condition & Attr(table.sort_key).not_exists()
            params['ConditionExpression'] = condition
        with _translate_errors("put", table):
            self._table(table).put_item(**params)

    def update(self, table: Table, key: Mapping[str, Any], fields: Mapping[str, Any]) -> Dict[str, Any]:
        """SET each of `fields` on an existing document and return the new document."""
        if not fields:
            raise ValueError("update requires at least one field")
        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        assignments = []
        for counter, (field, value) in enumerate(fields.items()):
            names[f"#f{counter}"] = field
            values[f":v{counter}"] = to_dynamo(value)
            assignments.append(f"#f{counter} = :v{counter}")

        with _translate_errors("update", table):
            response = self._table(table).update_item(
                Key=dict(key),
                UpdateExpression="SET " + ", ".join(assignments),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues='ALL_NEW',
            )
        return from_dynamo(response.get('Attributes', {}))

    def delete(self, table: Table, key: Mapping[str, Any]) -> None:
        with _translate_errors("delete", table):
            self._table(table).delete_item(Key=dict(key))

    def batch_put(self, table: Table, items: Iterable[Mapping[str, Any]]) -> None:
        # batch_writer chunks into 25-item requests and resends unprocessed items
        with _translate_errors("batch put", table):
            with self._table(table).batch_writer() as batch:
                for item in items:
                    batch.put_item(Item=to_dynamo(dict(item)))

    def set_list_item_field(
        self,
        table: Table,
        key: Mapping[str, Any],
        list_field: str,
        index: int,
        field: str,
        value: Any,
        expected: Mapping[str, Any],
    ) -> None:
        """
        SET list_field[index].field = value, only while the element at `index`
        still carries every attribute/value pair in `expected`.
        """
        names = {'#list': list_field, '#field': field}
        values = {':value': to_dynamo(value)}
        guards = []
        for counter, (name, expected_value) in enumerate(expected.items()):
            names[f"#e{counter}"] = name
            values[f":e{counter}"] = to_dynamo(expected_value)
            guards.append(f"#list[{index}].#e{counter} = :e{counter}")

        with _translate_errors("list item update", table):
            self._table(table).update_item(
                Key=dict(key),
                UpdateExpression=f"SET #list[{index}].#field = :value",
                ConditionExpression=" AND ".join(guards),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )

    def claim_counter(self, table: Table, key: Mapping[str, Any], field: str, floor: int) -> int:
        """
        Atomically move a numeric counter to at least `floor` and return the
        value claimed by this call.

        When the counter is absent or below `floor` it is set to `floor`;
        otherwise it is incremented by one. Concurrent callers always receive
        distinct values. The counter lives on an existing document only:
        `ConditionFailed` is raised when the document does not exist.
        """
        names = {'#pk': table.partition_key, '#c': field}
        try:
            with _translate_errors("counter claim", table):
                self._table(table).update_item(
                    Key=dict(key),
                    UpdateExpression="SET #c = :floor",
                    ConditionExpression="attribute_exists(#pk) AND (attribute_not_exists(#c) OR #c < :floor)",
                    ExpressionAttributeNames=names,
                    ExpressionAttributeValues={':floor': floor},
                )
            return floor
        except ConditionFailed:
            pass

        with _translate_errors("counter increment", table):
            response = self._table(table).update_item(
                Key=dict(key),
                UpdateExpression="ADD #c :one",
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues={':one': 1},
                ReturnValues='UPDATED_NEW',
            )
        return int(response['Attributes'][field])


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency provider for the process-wide document store."""
    return request.app.state.store
