"""Tests for recordkit.records.env - binding environment variables into fields."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from recordkit.core.errors import PointerRequiredError, ValueDecodeError
from recordkit.records.env import set_env_field_values
from tests._support.records import EnvRecord, FrozenRecord, SampleModel, StructTagRecord


class TestSetEnvFieldValues:
    def test_values_from_process_environment(self, monkeypatch):
        monkeypatch.setenv("SAMPLE_BOOLVAL1", "true")
        monkeypatch.setenv("SAMPLE_BOOLVAL2", "false")
        monkeypatch.setenv("SAMPLE_INTVAL", "60606")
        monkeypatch.setenv("SAMPLE_SETSTRINGVAL", "replaced")
        monkeypatch.setenv("SAMPLE_STRINGVAL", "lalala")
        record = EnvRecord(set_string_val="already set")

        set_env_field_values(record)

        assert record.enabled is True
        assert record.disabled is False
        assert record.int_val == 60606
        assert record.set_string_val == "replaced"
        assert record.string_val == "lalala"
        assert record.untagged == "keep"

    def test_explicit_mapping(self):
        record = EnvRecord()
        set_env_field_values(record, {"SAMPLE_INTVAL": "8080"})
        assert record.int_val == 8080

    def test_unset_and_empty_leave_field_untouched(self):
        record = EnvRecord(int_val=5)
        set_env_field_values(record, {"SAMPLE_INTVAL": "", "SAMPLE_STRINGVAL": ""})
        assert record.int_val == 5
        assert record.string_val == "test"

    def test_quoted_string_is_decoded_as_json(self):
        record = EnvRecord()
        set_env_field_values(record, {"SAMPLE_STRINGVAL": '"with \\"quotes\\""'})
        assert record.string_val == 'with "quotes"'

    def test_json_list(self):
        record = EnvRecord()
        set_env_field_values(record, {"SAMPLE_HOSTS": '["a", "b"]'})
        assert record.hosts == ["a", "b"]

    def test_bare_timestamp_is_quoted(self):
        record = EnvRecord()
        set_env_field_values(record, {"SAMPLE_STARTED": "2024-01-15T09:30:00Z"})
        assert record.started == datetime(2024, 1, 15, 9, 30, tzinfo=UTC)

    def test_unsigned_value(self):
        record = EnvRecord()
        set_env_field_values(record, {"SAMPLE_WORKERS": "4"})
        assert record.workers == 4

    def test_struct_tag_string(self):
        record = StructTagRecord()
        set_env_field_values(record, {"PLANET": "Mars"})
        assert record.planet == "Mars"

    def test_pydantic_model(self):
        model = SampleModel()
        set_env_field_values(model, {"SAMPLE_NAME": "api", "SAMPLE_PORT": "9090"})
        assert model.name == "api"
        assert model.port == 9090

    def test_env_tag_from_settings(self, monkeypatch):
        monkeypatch.setenv("RECORDKIT_ENV_TAG", "api")
        record = StructTagRecord()
        set_env_field_values(record, {"planet": "Venus", "moons": "0"})
        assert record.planet == "Venus"
        assert record.moons == 0


class TestDecodeErrors:
    def test_invalid_integer(self):
        record = EnvRecord()
        with pytest.raises(ValueDecodeError) as exc_info:
            set_env_field_values(record, {"SAMPLE_INTVAL": "sixty"})

        error = exc_info.value
        assert isinstance(error.__cause__, ValidationError)
        assert error.context.env_var == "SAMPLE_INTVAL"
        assert error.context.field_name == "int_val"
        assert error.context.record_type == "EnvRecord"

    def test_negative_unsigned(self):
        with pytest.raises(ValueDecodeError):
            set_env_field_values(EnvRecord(), {"SAMPLE_WORKERS": "-1"})

    def test_negative_unsigned_on_model(self):
        with pytest.raises(ValueDecodeError):
            set_env_field_values(SampleModel(), {"SAMPLE_WORKERS": "-3"})

    def test_invalid_json_list(self):
        with pytest.raises(ValueDecodeError):
            set_env_field_values(EnvRecord(), {"SAMPLE_HOSTS": "a,b"})

    def test_frozen_rejected(self):
        with pytest.raises(PointerRequiredError):
            set_env_field_values(FrozenRecord(), {})
