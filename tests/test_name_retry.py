"""Tests for project creation under global name collisions."""
import re
from pathlib import Path
from unittest.mock import Mock

import pytest

from wbtl.core import retry as retry_module
from wbtl.core.errors import CloudflareApiError, NameCollisionExhaustedError
from wbtl.core.retry import create_with_unique_name


def suffixes(*values):
    it = iter(values)
    return lambda: next(it)


class TestCreateWithUniqueName:
    """Test the name collision retry loop."""

    def test_first_attempt_succeeds(self, cf_response):
        create = Mock(return_value=cf_response(result={"subdomain": "wbtl-app-timer"}))

        name, response, attempts = create_with_unique_name(create, "wbtl-app-timer")

        assert name == "wbtl-app-timer"
        assert attempts == 1
        assert response.success is True
        create.assert_called_once_with("wbtl-app-timer")

    def test_collisions_then_success_uses_suffix(self, cf_response, name_taken):
        create = Mock(side_effect=[name_taken(), name_taken(), name_taken(), cf_response()])

        name, _, attempts = create_with_unique_name(
            create, "wbtl-app-timer", suffix_factory=suffixes("a1b2", "c3d4", "e5f6")
        )

        assert name == "wbtl-app-timer-e5f6"
        assert attempts == 4
        tried = [call.args[0] for call in create.call_args_list]
        assert tried == [
            "wbtl-app-timer",
            "wbtl-app-timer-a1b2",
            "wbtl-app-timer-c3d4",
            "wbtl-app-timer-e5f6",
        ]

    def test_suffix_is_always_added_to_base_name(self, cf_response, name_taken):
        """Suffixes replace each other rather than accumulating."""
        create = Mock(side_effect=[name_taken(), name_taken(), cf_response()])

        name, _, _ = create_with_unique_name(create, "wbtl-app-timer")

        assert re.fullmatch(r"wbtl-app-timer-[0-9a-f]{4}", name)

    def test_nine_collisions_still_succeed(self, cf_response, name_taken):
        create = Mock(side_effect=[name_taken()] * 9 + [cf_response()])

        name, _, attempts = create_with_unique_name(create, "wbtl-app-timer")

        assert attempts == 10
        assert name != "wbtl-app-timer"
        assert create.call_count == 10

    def test_ten_collisions_fail(self, name_taken):
        create = Mock(return_value=name_taken())

        with pytest.raises(NameCollisionExhaustedError) as exc:
            create_with_unique_name(create, "wbtl-app-timer")

        assert create.call_count == 10
        assert exc.value.attempts == 10
        assert exc.value.last_name == create.call_args_list[-1].args[0]
        assert "after 10 attempts" in str(exc.value)

    def test_other_error_aborts_without_retry(self, cf_response):
        create = Mock(return_value=cf_response(
            success=False,
            errors=[{"code": 10000, "message": "Authentication error"}],
        ))

        with pytest.raises(CloudflareApiError) as exc:
            create_with_unique_name(create, "wbtl-app-timer")

        create.assert_called_once_with("wbtl-app-timer")
        assert "Authentication error" in str(exc.value)
        assert '"code": 10000' in str(exc.value)

    def test_collision_detected_by_message(self, cf_response, name_taken):
        taken = cf_response(success=False, errors=[{"code": 8000000, "message": "Project name is already taken"}])
        create = Mock(side_effect=[taken, cf_response()])

        name, _, attempts = create_with_unique_name(
            create, "wbtl-app-timer", suffix_factory=suffixes("beef")
        )

        assert name == "wbtl-app-timer-beef"
        assert attempts == 2

    def test_custom_attempt_limit(self, name_taken):
        create = Mock(return_value=name_taken())

        with pytest.raises(NameCollisionExhaustedError):
            create_with_unique_name(create, "wbtl-app-timer", max_attempts=3)

        assert create.call_count == 3

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            create_with_unique_name(Mock(), "wbtl-app-timer", max_attempts=0)

    def test_accepts_any_response_with_the_create_interface(self):
        class StubResponse:
            def __init__(self, taken):
                self.success = not taken
                self.raw = "{}"
                self.error_message = "name taken" if taken else ""
                self._taken = taken

            def is_name_taken(self):
                return self._taken

        create = Mock(side_effect=[StubResponse(True), StubResponse(False)])

        name, response, attempts = create_with_unique_name(
            create, "wbtl-app-timer", suffix_factory=suffixes("0a0b")
        )

        assert name == "wbtl-app-timer-0a0b"
        assert isinstance(response, StubResponse)
        assert attempts == 2


def test_retry_module_does_not_import_services():
    source = Path(retry_module.__file__).read_text()

    assert "wbtl.services" not in source
