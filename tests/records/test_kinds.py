"""Tests for recordkit.records.kinds - FieldKind classification."""

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any, Optional, Union

import pytest

from recordkit.records.kinds import (
    FieldKind,
    UInt,
    classify,
    is_record,
    is_record_type,
    kind_of_value,
)
from tests._support.records import SampleModel, SampleRecord, SampleSubrecord


class TestClassify:
    @pytest.mark.parametrize(
        "annotation, kind",
        [
            (bool, FieldKind.BOOL),
            (int, FieldKind.INT),
            (UInt, FieldKind.UINT),
            (float, FieldKind.FLOAT),
            (complex, FieldKind.COMPLEX),
            (str, FieldKind.STRING),
            (datetime, FieldKind.TIMESTAMP),
            (list[int], FieldKind.SEQUENCE),
            (tuple[str, ...], FieldKind.SEQUENCE),
            (Sequence[str], FieldKind.SEQUENCE),
            (list, FieldKind.SEQUENCE),
            (dict[str, str], FieldKind.MAPPING),
            (Mapping[str, int], FieldKind.MAPPING),
            (dict, FieldKind.MAPPING),
            (SampleSubrecord, FieldKind.RECORD),
            (SampleModel, FieldKind.RECORD),
            (Any, FieldKind.DYNAMIC),
            (int | str, FieldKind.DYNAMIC),
            (Callable[[], None], FieldKind.IGNORED),
            (bytes, FieldKind.IGNORED),
        ],
    )
    def test_kinds(self, annotation, kind):
        assert classify(annotation)[0] is kind

    def test_optional_unwraps_one_level(self):
        assert classify(int | None) == (FieldKind.OPTIONAL, FieldKind.INT, int)
        assert classify(Optional[SampleSubrecord]) == (
            FieldKind.OPTIONAL,
            FieldKind.RECORD,
            SampleSubrecord,
        )

    def test_optional_union_of_many_is_dynamic(self):
        assert classify(Union[int, str, None])[0] is FieldKind.DYNAMIC

    def test_scalar_kinds(self):
        assert FieldKind.STRING.is_scalar
        assert FieldKind.DYNAMIC.is_scalar
        assert not FieldKind.TIMESTAMP.is_scalar
        assert not FieldKind.RECORD.is_scalar


class TestKindOfValue:
    def test_bool_before_int(self):
        assert kind_of_value(True) is FieldKind.BOOL
        assert kind_of_value(1) is FieldKind.INT

    def test_records_and_containers(self):
        assert kind_of_value(SampleSubrecord()) is FieldKind.RECORD
        assert kind_of_value({"a": 1}) is FieldKind.MAPPING
        assert kind_of_value([1]) is FieldKind.SEQUENCE

    def test_callables_are_ignored(self):
        assert kind_of_value(print) is FieldKind.IGNORED
        assert kind_of_value(lambda: None) is FieldKind.IGNORED

    def test_unknown_types_are_dynamic(self):
        assert kind_of_value(b"raw") is FieldKind.DYNAMIC
        assert kind_of_value(None) is FieldKind.DYNAMIC


class TestIsRecord:
    def test_instances(self):
        assert is_record(SampleRecord())
        assert is_record(SampleModel())
        assert not is_record({"a": 1})
        assert not is_record(3)

    def test_classes_are_record_types_not_records(self):
        assert is_record_type(SampleRecord)
        assert is_record_type(SampleModel)
        assert not is_record(SampleRecord)
        assert not is_record_type(dict)
