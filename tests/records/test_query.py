"""Tests for recordkit.records.query - flattening records into query maps."""

import io
from datetime import UTC, datetime

from recordkit.records.query import QueryFields, flatten_query_fields, set_query_fields
from tests._support.records import Address, Customer, SampleRecord, SampleSubrecord


class TestSetQueryFields:
    def test_scalar_fields(self):
        record = SampleRecord(
            bool_val=True,
            float_val=9.99,
            int_val=10,
            string_val="Earth",
            uint_val=7,
        )
        values: dict[str, str] = {}
        buffer = io.StringIO()

        set_query_fields(record, values, buffer)

        assert values == {
            "boolVal": "true",
            "floatVal": "9.99",
            "intVal": "10",
            "stringVal": "Earth",
            "timeVal": "Monday January 01 00:00:00 0001 +0000",
            "uintVal": "7",
        }
        assert buffer.getvalue().split(" ")[:5] == ["true", "9.99", "10", "Earth", "Monday"]

    def test_false_is_a_value(self):
        values = flatten_query_fields(SampleRecord()).values
        assert values["boolVal"] == "false"

    def test_optionals_and_dynamic_values(self):
        record = SampleRecord(bool_optional_val=False, any_val=3.5)
        values = flatten_query_fields(record).values
        assert values["boolPointerVal"] == "false"
        assert values["interfaceVal"] == "3.5"

    def test_timestamps_use_wall_clock_layout(self, fixed_now):
        record = SampleRecord(time_val=fixed_now, time_optional_val=fixed_now)
        values = flatten_query_fields(record).values
        assert values["timeVal"] == "Monday January 15 09:30:00 2024 +0000"
        assert values["timePointerVal"] == "Monday January 15 09:30:00 2024 +0000"

    def test_string_keyed_maps_flatten_to_top_level(self, fixed_now):
        record = Customer(attributes={"tier": "gold", "joined": fixed_now, "score": 4})
        values = flatten_query_fields(record).values
        assert values["tier"] == "gold"
        assert values["joined"] == "Monday January 15 09:30:00 2024 +0000"
        assert values["score"] == "4"
        assert "attributes" not in values

    def test_non_string_keys_skipped(self):
        values = flatten_query_fields(Customer(attributes={1: "one", "two": "2"})).values
        assert values == {"two": "2", "created": "Monday January 01 00:00:00 0001 +0000"}

    def test_nested_records_recurse(self):
        record = Customer(name="Ada", address=Address(city="London"), billing=Address(zip_code="N1"))
        values = flatten_query_fields(record).values
        assert values["name"] == "Ada"
        assert values["city"] == "London"
        assert values["zip"] == "N1"

    def test_inline_subrecord_map(self):
        record = SampleRecord(subrecord_val=SampleSubrecord(map_val={"color": "blue"}))
        assert flatten_query_fields(record).values["color"] == "blue"

    def test_sequences_skipped(self):
        values = flatten_query_fields(Customer(tags_val=["a"])).values
        assert "tags" not in values


class TestAllValues:
    def test_distinct_values_once(self):
        record = Customer(name="Earth", address=Address(city="Earth"))
        result = flatten_query_fields(record)
        assert result.all_values.split(" ").count("Earth") == 1

    def test_first_seen_order(self):
        record = Customer(name="b", address=Address(city="a", zip_code="b"))
        result = flatten_query_fields(record)
        assert result.all_values.startswith("b a ")

    def test_writes_to_supplied_buffer(self):
        buffer = io.StringIO()
        buffer.write("prefix:")
        set_query_fields(Customer(name="x"), {}, buffer)
        assert buffer.getvalue().startswith("prefix:x")

    def test_result_type(self):
        result = flatten_query_fields(Customer(name="x"))
        assert isinstance(result, QueryFields)
        assert result.values["name"] == "x"

    def test_custom_time_format(self, monkeypatch):
        monkeypatch.setenv("RECORDKIT_QUERY_TIME_FORMAT", "%Y-%m-%d")
        record = Customer(created_at=datetime(2024, 1, 15, tzinfo=UTC))
        assert flatten_query_fields(record).values["created"] == "2024-01-15"
