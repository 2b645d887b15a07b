import dataclasses

import pytest

from htmlplain.core.models import Break, Enter, Exit, TextRun


def test_break_requires_positive_count():
    with pytest.raises(ValueError, match="must be >= 1"):
        Break(0)


def test_items_compare_by_value():
    assert Break(2) == Break(2)
    assert Break(1) != Break(2)
    assert TextRun("a") == TextRun("a")


def test_items_are_immutable():
    item = TextRun("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.text = "b"  # type: ignore[misc]


def test_enter_and_exit_wrap_the_same_node():
    node = object()
    assert Enter(node).node is Exit(node).node  # type: ignore[arg-type]
    assert Enter(node) != Exit(node)  # type: ignore[arg-type]
