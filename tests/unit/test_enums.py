"""Unit tests for classification, data layer and severity enums."""

import logging

import pytest

from errchain.enums import CRITICAL_SEVERITIES, Classification, DataLayer, Severity


class TestClassification:
    """Test Classification enum."""

    @pytest.mark.parametrize("classification,status", [
        (Classification.NOT_FOUND, 404),
        (Classification.INVALID_ARGUMENTS, 412),
        (Classification.BAD_REQUEST, 400),
        (Classification.INTERNAL_ERROR, 500),
        (Classification.ACCESS_DENIED, 403),
        (Classification.UNAUTHORIZED, 401),
        (Classification.DEFAULT, 500),
    ])
    def test_status_codes(self, classification, status):
        assert classification.status_code == status

    def test_every_member_has_status_code(self):
        for classification in Classification:
            assert isinstance(classification.status_code, int)

    def test_string_values(self):
        """Test that members compare equal to their string values."""
        assert Classification("not_found") is Classification.NOT_FOUND
        assert Classification.NOT_FOUND == "not_found"


class TestDataLayer:
    """Test DataLayer enum."""

    def test_members(self):
        assert {layer.value for layer in DataLayer} == {
            "default", "transport", "controller", "use_case", "data_service", "container"
        }


class TestSeverity:
    """Test Severity enum."""

    @pytest.mark.parametrize("severity,level", [
        (Severity.DEBUG, logging.DEBUG),
        (Severity.INFO, logging.INFO),
        (Severity.WARNING, logging.WARNING),
        (Severity.ERROR, logging.ERROR),
        (Severity.CRITICAL, logging.CRITICAL),
        (Severity.FATAL, logging.CRITICAL),
        (Severity.PANIC, logging.CRITICAL),
    ])
    def test_log_level(self, severity, level):
        assert severity.log_level == level

    def test_critical_severities(self):
        assert CRITICAL_SEVERITIES == {Severity.CRITICAL, Severity.FATAL, Severity.PANIC}
