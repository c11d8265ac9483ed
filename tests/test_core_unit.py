# File: /tests/test_core_unit.py | Version: 1.0 | Title: Settings, logging config and error envelopes
import json
import logging

import pytest
from pydantic import BaseModel

from fieldview.core import logging as fv_logging
from fieldview.core.config import Settings
from fieldview.core.errors import FieldNotEditableError, ValidationError


def test_settings_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_JSON", "DATE_EQUALS_TOLERANCE_MS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.LOG_LEVEL == "INFO"
    assert s.LOG_JSON is False
    assert s.DATE_EQUALS_TOLERANCE_MS == 86_400_000


def test_settings_env_override(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DATE_EQUALS_TOLERANCE_MS", "3600000")
    s = Settings(_env_file=None)
    assert s.LOG_LEVEL == "DEBUG"
    assert s.DATE_EQUALS_TOLERANCE_MS == 3_600_000


def test_json_console_formatter_emits_one_object():
    record = logging.LogRecord("fieldview.crud", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    out = json.loads(fv_logging.JsonConsole().format(record))
    assert out == {"level": "INFO", "logger": "fieldview.crud", "message": "hello x"}


def test_configure_logging_sets_package_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(fv_logging.logging.config, "dictConfig", lambda cfg: captured.update(cfg))

    fv_logging.configure_logging(level="debug", use_json=True)
    assert captured["loggers"]["fieldview"]["level"] == "DEBUG"
    assert captured["formatters"]["default"]["()"] is fv_logging.JsonConsole

    fv_logging.configure_logging(level="warning", use_json=False)
    assert "format" in captured["formatters"]["default"]
    assert captured["root"]["level"] == "WARNING"


class _Sample(BaseModel):
    n: int


def test_validation_error_envelope():
    with pytest.raises(Exception) as raw:
        _Sample.model_validate({"n": "nope"})
    err = ValidationError.from_pydantic(raw.value, "sample")
    assert isinstance(err, ValueError)
    body = err.to_dict()["error"]
    assert body["code"] == "UNPROCESSABLE_ENTITY"
    assert body["message"] == "Invalid sample"
    assert body["details"][0]["loc"] == "n"


def test_validation_error_without_details():
    assert ValidationError("bad").to_dict() == {
        "error": {"code": "UNPROCESSABLE_ENTITY", "message": "bad"}
    }


def test_field_not_editable_message():
    err = FieldNotEditableError(8, "formula")
    assert "read-only" in str(err)
    assert err.field_type == "formula"
