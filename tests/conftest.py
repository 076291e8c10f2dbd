import copy
from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from campus_erp.database import ConditionFailed
from campus_erp.main import create_app


class FakeStore:
    """
    In-memory stand-in for DocumentStore with the same method surface.
    Documents are keyed by (partition value, sort value) per table name.
    """

    def __init__(self):
        self.tables = defaultdict(dict)
        self.closed = False

    def _key(self, table, item):
        sort_value = item.get(table.sort_key) if table.sort_key else None
        return (item.get(table.partition_key), sort_value)

    def seed(self, table, *items):
        for item in items:
            self.tables[table.name][self._key(table, item)] = copy.deepcopy(item)

    def raw(self, table, key):
        return self.tables[table.name].get(self._key(table, key))

    def all(self, table):
        return list(self.tables[table.name].values())

    def get(self, table, key):
        return copy.deepcopy(self.raw(table, key))

    def query(self, table, partition_value, sort_prefix=None, descending=False):
        if sort_prefix is not None and table.sort_key is None:
            raise ValueError(f"{table.name} has no sort key to match a prefix against")
        items = [
            item for item in self.all(table)
            if item.get(table.partition_key) == partition_value
            and (sort_prefix is None or str(item.get(table.sort_key, "")).startswith(sort_prefix))
        ]
        if table.sort_key:
            items.sort(key=lambda item: str(item.get(table.sort_key)), reverse=descending)
        return copy.deepcopy(items)

    def scan(self, table, filters=None):
        filters = filters or {}
        return copy.deepcopy([
            item for item in self.all(table)
            if all(item.get(name) == value for name, value in filters.items())
        ])

    def put(self, table, item, if_absent=False):
        key = self._key(table, item)
        if if_absent and key in self.tables[table.name]:
            raise ConditionFailed("The conditional request failed")
        self.tables[table.name][key] = copy.deepcopy(dict(item))

    def update(self, table, key, fields):
        if not fields:
            raise ValueError("update requires at least one field")
        document = self.tables[table.name].setdefault(self._key(table, key), dict(key))
        document.update(copy.deepcopy(dict(fields)))
        return copy.deepcopy(document)

    def delete(self, table, key):
        self.tables[table.name].pop(self._key(table, key), None)

    def batch_put(self, table, items):
        for item in items:
            self.put(table, item)

    def set_list_item_field(self, table, key, list_field, index, field, value, expected):
        document = self.raw(table, key)
        elements = (document or {}).get(list_field) or []
        if index >= len(elements) or any(elements[index].get(k) != v for k, v in expected.items()):
            raise ConditionFailed("The conditional request failed")
        elements[index][field] = value

    def claim_counter(self, table, key, field, floor):
        document = self.raw(table, key)
        if document is None:
            raise ConditionFailed("The conditional request failed")
        current = document.get(field)
        if current is None or current < floor:
            document[field] = floor
        else:
            document[field] = current + 1
        return document[field]

    def close(self):
        self.closed = True


class FakeObjectStorage:
    def __init__(self, bucket="erp-s101", region="ap-south-1"):
        self.bucket = bucket
        self.region = region
        self.objects = {}

    def public_url(self, key):
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put_object(self, key, data, content_type):
        self.objects[key] = (data, content_type)
        return self.public_url(key)

    def close(self):
        pass


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def object_storage():
    return FakeObjectStorage()


@pytest.fixture()
def client(store, object_storage):
    """
    TestClient over an app wired to the in-memory store and object storage.
    """
    with TestClient(create_app(store=store, object_storage=object_storage)) as test_client:
        yield test_client
