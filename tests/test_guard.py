"""Tests for the recursion guard."""

import threading

import pytest

from typed_records import RecursionGuard


class TestRecursionGuard:
    """Tests for RecursionGuard."""

    def test_scoped_registration(self):
        """Test scoped registration."""
        guard = RecursionGuard()
        obj = object()

        assert guard.is_inspecting(obj) is False
        with guard.inspecting(obj):
            assert guard.is_inspecting(obj) is True
            assert len(guard) == 1
        assert guard.is_inspecting(obj) is False
        assert len(guard) == 0

    def test_nested_same_object(self):
        """Test nested same object."""
        guard = RecursionGuard()
        obj = object()

        with guard.inspecting(obj):
            with guard.inspecting(obj):
                assert len(guard) == 2
            assert guard.is_inspecting(obj) is True
        assert guard.is_inspecting(obj) is False

    def test_identity_not_equality(self):
        """Test identity not equality."""
        guard = RecursionGuard()
        first = [1]
        second = [1]

        with guard.inspecting(first):
            assert guard.is_inspecting(second) is False

    def test_released_on_error(self):
        """Test released on error."""
        guard = RecursionGuard()
        obj = object()

        with pytest.raises(ValueError):
            with guard.inspecting(obj):
                raise ValueError("boom")

        assert guard.is_inspecting(obj) is False
        assert len(guard) == 0

    def test_separate_guards(self):
        """Test separate guards."""
        first = RecursionGuard()
        second = RecursionGuard()
        obj = object()

        with first.inspecting(obj):
            assert second.is_inspecting(obj) is False

    def test_per_thread(self):
        """Test per thread."""
        guard = RecursionGuard()
        obj = object()
        seen = []

        def worker():
            seen.append(guard.is_inspecting(obj))

        with guard.inspecting(obj):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == [False]
