"""Task mutator tests."""

from datetime import date, datetime

import pytest

from todospan.mutators import (
    add_context,
    add_project,
    mark_completed,
    mark_incomplete,
    remove_context,
    remove_key,
    remove_project,
    set_key_value,
    set_priority,
)


def fixed_today() -> date:
    return date(2025, 1, 2)


class TestMarkCompleted:
    """Tests for mark_completed."""

    def test_with_date_string(self) -> None:
        """Verify x and the given date are prepended."""
        result = mark_completed("(A) Buy soil", "2025-09-25")

        assert result.startswith("x 2025-09-25")
        assert result == "x 2025-09-25 (A) Buy soil"

    def test_with_date_object(self) -> None:
        """Verify date objects are written in ISO format."""
        assert mark_completed("Buy soil", date(2025, 9, 25)) == "x 2025-09-25 Buy soil"

    def test_with_datetime(self) -> None:
        """Verify only the date part of a datetime is written."""
        result = mark_completed("Buy soil", datetime(2025, 9, 25, 14, 30))
        assert result == "x 2025-09-25 Buy soil"

    def test_default_uses_today_provider(self) -> None:
        """Verify the injected clock supplies the default date."""
        assert mark_completed("Buy soil", today=fixed_today) == "x 2025-01-02 Buy soil"

    def test_default_uses_system_clock(self) -> None:
        """Verify the system date is used without a provider."""
        result = mark_completed("Buy soil")
        assert result == f"x {date.today().isoformat()} Buy soil"

    def test_without_date(self) -> None:
        """Verify add_date=False writes a bare x."""
        assert mark_completed("Buy soil", add_date=False) == "x Buy soil"

    def test_already_completed(self) -> None:
        """Verify a completed task is returned unchanged."""
        task = "x 2024-01-01 Buy soil"
        assert mark_completed(task, "2025-09-25") == task

    def test_idempotent(self) -> None:
        """Verify completing twice equals completing once."""
        once = mark_completed("(B) Buy soil +garden", today=fixed_today)
        assert mark_completed(once, today=fixed_today) == once

    def test_priority_to_tag(self) -> None:
        """Verify priority (A) is converted to pri:A."""
        result = mark_completed("(A) Buy soil", "2025-09-25", priority_to_tag=True)
        assert result == "x 2025-09-25 Buy soil pri:A"

    def test_priority_to_tag_keeps_creation_date(self) -> None:
        """Verify the creation date stays after the completion date."""
        result = mark_completed(
            "(B) 2024-01-15 Task", "2025-09-25", priority_to_tag=True
        )
        assert result == "x 2025-09-25 2024-01-15 Task pri:B"

    def test_priority_to_tag_without_priority(self) -> None:
        """Verify nothing is added when there is no priority."""
        result = mark_completed("Buy soil", "2025-09-25", priority_to_tag=True)
        assert result == "x 2025-09-25 Buy soil"


class TestMarkIncomplete:
    """Tests for mark_incomplete."""

    @pytest.mark.parametrize(
        ("task", "expected"),
        [
            ("x 2025-09-25 Buy soil", "Buy soil"),
            ("x Buy soil", "Buy soil"),
            ("x 2025-09-25 2024-01-15 Buy soil", "2024-01-15 Buy soil"),
            ("Buy soil", "Buy soil"),
            ("xylophone lesson", "xylophone lesson"),
        ],
    )
    def test_mark_incomplete(self, task: str, expected: str) -> None:
        """Verify the completion prefix is stripped."""
        assert mark_incomplete(task) == expected

    def test_undo_completion(self) -> None:
        """Verify completing then reopening restores the task."""
        task = "(A) 2024-01-15 Buy soil @garden"
        assert mark_incomplete(mark_completed(task, today=fixed_today)) == task


class TestSetPriority:
    """Tests for set_priority."""

    def test_add_priority(self) -> None:
        """Verify a priority is prepended."""
        assert set_priority("Buy soil", "A") == "(A) Buy soil"

    def test_remove_priority(self) -> None:
        """Verify None removes the priority."""
        assert set_priority("(B) Buy soil", None) == "Buy soil"

    def test_replace_priority(self) -> None:
        """Verify the priority is replaced, not duplicated."""
        result = set_priority(set_priority("Buy soil", "A"), "B")

        assert result == "(B) Buy soil"
        assert result.count("(") == 1

    def test_remove_missing_priority(self) -> None:
        """Verify removing an absent priority only trims."""
        assert set_priority(" Buy soil ", None) == "Buy soil"

    @pytest.mark.parametrize("priority", ["a", "AB", "1", ""])
    def test_invalid_priority(self, priority: str) -> None:
        """Verify anything but one uppercase letter is rejected."""
        with pytest.raises(ValueError):
            set_priority("Buy soil", priority)


class TestProjectsAndContexts:
    """Tests for add/remove project and context."""

    def test_add_project(self) -> None:
        """Verify a project tag is appended."""
        assert add_project("Buy soil", "garden") == "Buy soil +garden"

    def test_add_existing_project(self) -> None:
        """Verify an existing project is not duplicated."""
        task = "Buy soil +garden"
        assert add_project(task, "garden") == task

    def test_add_project_with_longer_name_present(self) -> None:
        """Verify a project that only prefixes another one is still added."""
        assert add_project("Buy soil +gardening", "garden") == (
            "Buy soil +gardening +garden"
        )

    def test_add_context_to_empty_task(self) -> None:
        """Verify the result is trimmed."""
        assert add_context("", "home") == "@home"

    def test_add_existing_context(self) -> None:
        """Verify an existing context is not duplicated."""
        task = "Call Bob @home"
        assert add_context(task, "home") == task

    def test_remove_project(self) -> None:
        """Verify only the named project is removed."""
        assert remove_project("Buy soil +garden +yard", "garden") == "Buy soil +yard"

    def test_remove_missing_project(self) -> None:
        """Verify removing an absent project is a no-op."""
        task = "Buy soil +garden"
        assert remove_project(task, "yard") == task

    def test_remove_context(self) -> None:
        """Verify a context is removed with its separating space."""
        assert remove_context("Call Bob @home @phone", "phone") == "Call Bob @home"

    def test_remove_context_at_start(self) -> None:
        """Verify a leading context is removed."""
        assert remove_context("@home Call Bob", "home") == " Call Bob"

    def test_remove_missing_context(self) -> None:
        """Verify removing an absent context is a no-op."""
        task = "Call Bob @home"
        assert remove_context(task, "work") == task


class TestKeyValues:
    """Tests for set_key_value and remove_key."""

    def test_set_existing_key(self) -> None:
        """Verify an existing value is replaced in place."""
        task = "Call Bob due:2025-06-07 @home"
        assert set_key_value(task, "due", "2025-06-10") == (
            "Call Bob due:2025-06-10 @home"
        )

    def test_set_missing_key(self) -> None:
        """Verify a missing key is appended."""
        assert set_key_value("Buy soil", "due", "2025-10-01") == (
            "Buy soil due:2025-10-01"
        )

    def test_set_key_value_matching_key_name(self) -> None:
        """Known edge case: a value equal to its key replaces the key text."""
        assert set_key_value("Task a:a", "a", "b") == "Task b:a"

    def test_remove_key(self) -> None:
        """Verify the key-value pair is removed."""
        assert remove_key("Buy soil due:2025-10-01 @garden", "due") == (
            "Buy soil @garden"
        )

    def test_remove_missing_key(self) -> None:
        """Verify removing an absent key is a no-op."""
        task = "Buy soil @garden"
        assert remove_key(task, "due") == task
