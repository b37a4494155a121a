"""Tests for core/errors.py module."""

import pytest

from docplane.core.errors import ConfigError, DocPlaneError, ErrorCode


class TestDocPlaneError:
    def test_is_exception(self) -> None:
        with pytest.raises(DocPlaneError):
            raise DocPlaneError(code=ErrorCode.CONFIG_PARSE_ERROR, message="bad")

    def test_error_name(self) -> None:
        err = DocPlaneError(code=ErrorCode.CONFIG_INVALID_VALUE, message="bad")
        assert err.error_name == "CONFIG_INVALID_VALUE"

    def test_str(self) -> None:
        err = DocPlaneError(code=ErrorCode.CONFIG_PARSE_ERROR, message="oops")
        assert str(err) == "[2001] CONFIG_PARSE_ERROR: oops"

    def test_to_dict(self) -> None:
        err = DocPlaneError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="oops",
            details={"path": "/x.yaml"},
        )
        assert err.to_dict() == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "oops",
            "retryable": False,
            "details": {"path": "/x.yaml"},
        }


class TestConfigError:
    def test_parse_error(self) -> None:
        err = ConfigError.parse_error("/etc/docplane.yaml", "unexpected token")

        assert isinstance(err, DocPlaneError)
        assert err.code is ErrorCode.CONFIG_PARSE_ERROR
        assert "/etc/docplane.yaml" in err.message
        assert err.details == {"path": "/etc/docplane.yaml", "reason": "unexpected token"}

    def test_invalid_value(self) -> None:
        err = ConfigError.invalid_value("cache.ttl_sec", -1, "must be positive")

        assert err.code is ErrorCode.CONFIG_INVALID_VALUE
        assert err.message == "Invalid value for 'cache.ttl_sec': must be positive"
        assert err.details["value"] == "-1"
