"""Tests for schema registration and the validating schema cache."""

import threading

import pytest

from segment_catalog import SEGMENT_ELEMENTS, transaction_name
from x12_errors import SchemaError, ValidationError
from x12_schema import FieldDefinition, SchemaCache, SchemaRegistry, build_schema


def _fields(*orders):
    return [FieldDefinition(name=f"F{i}", order=order) for i, order in enumerate(orders)]


def test_contiguous_schema_builds():
    fields = build_schema("ABC", _fields(1, 2, 3))
    assert [f.order for f in fields] == [1, 2, 3]
    assert isinstance(fields, tuple)


def test_gap_is_rejected():
    with pytest.raises(SchemaError, match="order 3 was never declared"):
        build_schema("ABC", _fields(1, 2, 4))


def test_duplicate_names_both_fields():
    fields = [
        FieldDefinition("First", 1),
        FieldDefinition("Second", 2),
        FieldDefinition("Other", 2),
    ]
    with pytest.raises(SchemaError) as excinfo:
        build_schema("ABC", fields)
    assert "Second" in str(excinfo.value)
    assert "Other" in str(excinfo.value)
    assert "Order 2" in str(excinfo.value)


def test_orders_start_at_one():
    with pytest.raises(SchemaError, match="orders start at 1"):
        build_schema("ABC", _fields(0, 1))
    with pytest.raises(SchemaError, match="order 1 was never declared"):
        build_schema("ABC", _fields(2, 1))


def test_schema_error_is_a_validation_error():
    assert issubclass(SchemaError, ValidationError)


def test_registry():
    registry = SchemaRegistry({"ABC": _fields(1)})
    registry.register("XYZ", _fields(1, 2))
    assert "ABC" in registry
    assert "ZZZ" not in registry
    assert len(registry) == 2
    assert sorted(registry.codes()) == ["ABC", "XYZ"]
    assert registry.fields_for("ZZZ") is None
    assert [f.order for f in registry.fields_for("XYZ")] == [1, 2]


def test_cache_unknown_code_is_empty():
    cache = SchemaCache(SchemaRegistry())
    assert cache.get_or_build("ZZZ") == ()
    assert not cache.is_known("ZZZ")
    assert "ZZZ" not in cache


def test_cache_builds_once():
    cache = SchemaCache(SchemaRegistry({"ABC": _fields(1, 2)}))
    first = cache.get_or_build("ABC")
    assert cache.get_or_build("ABC") is first
    assert "ABC" in cache


def test_cache_surfaces_schema_errors():
    cache = SchemaCache(SchemaRegistry({"BAD": _fields(1, 3)}))
    assert cache.is_known("BAD")
    with pytest.raises(SchemaError):
        cache.get_or_build("BAD")
    assert "BAD" not in cache


def test_warm_builds_every_code():
    cache = SchemaCache(SchemaRegistry({"ABC": _fields(1), "XYZ": _fields(1, 2)}))
    assert cache.warm() == 2
    assert "ABC" in cache and "XYZ" in cache


class CountingRegistry(SchemaRegistry):

    def __init__(self, schemas):
        super().__init__(schemas)
        self.lookups = 0

    def fields_for(self, code):
        self.lookups += 1
        return super().fields_for(code)


def test_concurrent_first_use_builds_once():
    registry = CountingRegistry({"ABC": _fields(1, 2, 3)})
    cache = SchemaCache(registry)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(cache.get_or_build("ABC"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert registry.lookups == 1
    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_catalog_schemas_are_valid(registry):
    cache = SchemaCache(registry)
    assert cache.warm() == len(SEGMENT_ELEMENTS)
    nm1 = cache.get_or_build("NM1")
    assert [f.name for f in nm1[:3]] == ["NM101", "NM102", "NM103"]
    assert not nm1[0].optional and nm1[2].optional
    assert nm1[2].max_length == 60


def test_transaction_name():
    assert transaction_name("835") == "Remittance Advice"
    assert transaction_name("123") == "X12 123"


def test_duplicate_field_name_is_rejected():
    fields = [
        FieldDefinition("NAME", 1),
        FieldDefinition("CODE", 2),
        FieldDefinition("NAME", 3),
    ]
    with pytest.raises(SchemaError, match="Field name NAME is declared more than once"):
        build_schema("ABC", fields)
