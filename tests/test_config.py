import pytest
from pydantic import ValidationError

from zscanner.config import DEFAULT_PORT, Settings, load_settings


def test_defaults_from_empty_environment():
    s = load_settings({})
    assert s.port == DEFAULT_PORT == 10805
    assert s.node_env == "development"
    assert s.debug_level == "debug"
    assert s.verify_client_tag is False
    assert s.seacat_endpoint is None
    assert s.seacat_username is None
    assert s.seacat_password is None
    assert s.authenticator == "none"
    assert s.document_storage == "demo"
    assert s.router_prefix == "/api-zscanner"
    assert s.is_production is False


def test_values_from_environment():
    s = load_settings(
        {
            "PORT": "8080",
            "NODE_ENV": "production",
            "DEBUG_LEVEL": "warn",
            "VERIFY_CLIENT_TAG": "true",
            "SEACAT_ENDPOINT": "https://seacat.example",
            "SEACAT_USERNAME": "scanner",
            "SEACAT_PASSWORD": "secret",
            "ZSCANNER_AUTHENTICATOR": "seacat",
            "ZSCANNER_STORAGE": "seacat",
            "ROUTER_PREFIX": "/zs",
        }
    )
    assert s.port == 8080
    assert s.is_production is True
    assert s.debug_level == "warn"
    assert s.verify_client_tag is True
    assert s.seacat_endpoint == "https://seacat.example"
    assert s.seacat_username == "scanner"
    assert s.seacat_password == "secret"
    assert s.authenticator == "seacat"
    assert s.document_storage == "seacat"
    assert s.router_prefix == "/zs"


@pytest.mark.parametrize("raw", ["abc", "0", "", " "])
def test_bad_port_falls_back(raw):
    assert load_settings({"PORT": raw}).port == DEFAULT_PORT


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("false", False), ("off", False), ("", False)],
)
def test_verify_client_tag_flag(raw, expected):
    assert load_settings({"VERIFY_CLIENT_TAG": raw}).verify_client_tag is expected


def test_empty_strings_use_defaults():
    s = load_settings({"NODE_ENV": "", "ROUTER_PREFIX": ""})
    assert s.node_env == "development"
    assert s.router_prefix == "/api-zscanner"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("ZSCANNER_STORAGE", "memory")
    s = load_settings()
    assert s.port == 9001
    assert s.document_storage == "memory"


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(ValidationError):
        s.port = 1
