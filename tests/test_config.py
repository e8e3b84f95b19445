"""Tests for proto_templates.config."""

import logging

import pytest

from proto_templates.config import (
    DEFAULT_MAX_DEPTH,
    LOG_LEVEL_ENV_VAR,
    MAX_DEPTH_ENV_VAR,
    ResolveOptions,
    configure_logging,
)


class TestResolveOptions:
    def test_default(self):
        assert ResolveOptions().max_depth == DEFAULT_MAX_DEPTH

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            ResolveOptions(max_depth=0)

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(MAX_DEPTH_ENV_VAR, raising=False)
        assert ResolveOptions.from_env() == ResolveOptions()

    def test_from_env_value(self, monkeypatch):
        monkeypatch.setenv(MAX_DEPTH_ENV_VAR, "12")
        assert ResolveOptions.from_env().max_depth == 12

    @pytest.mark.parametrize("raw", ["abc", "-3", "0"])
    def test_from_env_invalid_falls_back(self, monkeypatch, caplog, raw):
        monkeypatch.setenv(MAX_DEPTH_ENV_VAR, raw)
        with caplog.at_level(logging.WARNING, logger="proto_templates.config"):
            options = ResolveOptions.from_env()
        assert options.max_depth == DEFAULT_MAX_DEPTH
        assert MAX_DEPTH_ENV_VAR in caplog.text


def test_configure_logging_accepts_unknown_level(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "chatty")
    configure_logging()  # falls back to WARNING without raising
