"""
Unit tests for Result and Error values.
"""
import pytest
from django.test import SimpleTestCase

from apps.core.results import DomainErrors, Error, Result, ResultAccessError


class ErrorTest(SimpleTestCase):
    """Test Error factories and canonical domain errors."""

    def test_not_found_with_integer_id(self):
        error = Error.not_found("Task", 42)
        self.assertEqual(error.code, "Task.NotFound")
        self.assertEqual(error.description, "Task with ID 42 was not found.")

    def test_not_found_with_string_identifier(self):
        error = DomainErrors.User.not_found("alice@example.com")
        self.assertEqual(error.code, "User.NotFound")
        self.assertEqual(error.description, "User 'alice@example.com' was not found.")

    def test_generic_factories(self):
        self.assertEqual(Error.validation("bad").code, "Validation.Error")
        self.assertEqual(Error.conflict("dup").code, "Conflict.Error")
        self.assertEqual(Error.unauthorized("no").code, "Unauthorized.Error")

    def test_errors_compare_by_value(self):
        self.assertEqual(DomainErrors.Task.not_found(1), Error("Task.NotFound", "Task with ID 1 was not found."))
        self.assertEqual(Error.NONE, Error("", ""))


class ResultTest(SimpleTestCase):
    """Test success/failure access rules."""

    def test_success_holds_value(self):
        result = Result.success(5)
        self.assertTrue(result.is_success)
        self.assertFalse(result.is_failure)
        self.assertEqual(result.value, 5)

    def test_success_without_value(self):
        result = Result.success()
        self.assertTrue(result.is_success)
        self.assertIsNone(result.value)

    def test_failure_holds_error(self):
        result = Result.failure(DomainErrors.Task.NOT_OWNED)
        self.assertTrue(result.is_failure)
        self.assertEqual(result.error.code, "Task.NotOwned")

    def test_value_of_failure_raises(self):
        result = Result.failure(DomainErrors.User.INVALID_CREDENTIALS)
        with pytest.raises(ResultAccessError):
            result.value

    def test_error_of_success_raises(self):
        with pytest.raises(ResultAccessError):
            Result.success("ok").error

    def test_inconsistent_construction_is_rejected(self):
        with pytest.raises(ValueError):
            Result(True, error=Error.validation("x"))
        with pytest.raises(ValueError):
            Result(False)

    def test_match(self):
        ok = Result.success(2).match(lambda value: value * 10, lambda error: error.code)
        failed = Result.failure(Error.validation("x")).match(lambda value: value, lambda error: error.code)
        self.assertEqual(ok, 20)
        self.assertEqual(failed, "Validation.Error")
