"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import pytest

from hrms_core.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    ConnectionError,
    DomainError,
    ExternalServiceError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        assert BaseError("oops").message == "oops"

    def test_default_code(self) -> None:
        assert BaseError("oops").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("oops", code="custom").code == "custom"

    def test_detail_is_copied(self) -> None:
        detail = {"k": 1}
        err = BaseError("oops", detail=detail)
        detail["k"] = 2
        assert err.detail == {"k": 1}
        assert BaseError("oops").detail == {}

    def test_cause_chained(self) -> None:
        cause = ValueError("inner")
        err = BaseError("outer", cause=cause)
        assert err.__cause__ is cause

    def test_str_is_the_message(self) -> None:
        assert str(NotFoundError("attendance", "42")) == "attendance '42' not found"

    def test_repr_contains_code_and_message(self) -> None:
        assert repr(ConflictError("dup")) == "ConflictError(conflict: dup)"


class TestDomainErrors:
    def test_not_found_formats_message(self) -> None:
        err = NotFoundError("attendance", "42")
        assert err.message == "attendance '42' not found"
        assert err.entity == "attendance"
        assert err.entity_id == "42"

    def test_not_found_without_id(self) -> None:
        assert NotFoundError("record").message == "record not found"

    def test_not_found_explicit_message(self) -> None:
        assert NotFoundError("record", message="Record not found").message == "Record not found"

    def test_validation_error_field(self) -> None:
        err = ValidationError("bad", field="month")
        assert err.field == "month"
        assert err.code == "validation_error"

    @pytest.mark.parametrize("cls", [NotFoundError, ConflictError, ValidationError])
    def test_subclasses_of_domain_error(self, cls: type) -> None:
        assert issubclass(cls, DomainError)


class TestApplicationAndInfrastructureErrors:
    def test_forbidden_defaults(self) -> None:
        err = ForbiddenError()
        assert err.message == "You do not have permission to perform this action"
        assert err.code == "forbidden"
        assert isinstance(err, ApplicationError)

    def test_connection_error_default_message(self) -> None:
        err = ConnectionError()
        assert err.message == "Network error - please check your connection"
        assert isinstance(err, InfrastructureError)

    def test_external_service_error_status(self) -> None:
        err = ExternalServiceError(status_code=503)
        assert err.status_code == 503
        assert err.message == "Something went wrong. Please try again."

    def test_explicit_message_wins(self) -> None:
        assert ConnectionError("Get attendance failed after 3 retries").message == (
            "Get attendance failed after 3 retries"
        )

    def test_base_default_message(self) -> None:
        assert BaseError().message == "Unexpected error"
        assert ConflictError().message == "This record already exists"
