"""Wrapping focus over form-like items with per-item validation errors."""

from __future__ import annotations

from collections.abc import Callable

Validator = Callable[[int], "str | None"]


class FocusNavigator:
    """Track which item has focus and which items currently fail validation.

    Empty error strings count as "no error". The error list always has one
    slot per item, growing or shrinking with ``item_count``.
    """

    def __init__(self, item_count: int, initial_index: int = 0) -> None:
        self._item_count = max(0, item_count)
        self._focused_index = 0
        self._errors: list[str | None] = [None] * self._item_count
        if self._item_count > 0:
            self._focused_index = max(0, min(initial_index, self._item_count - 1))

    @property
    def focused_index(self) -> int:
        return self._focused_index

    @property
    def item_count(self) -> int:
        return self._item_count

    @item_count.setter
    def item_count(self, value: int) -> None:
        new_count = max(0, value)
        if new_count > self._item_count:
            self._errors.extend([None] * (new_count - self._item_count))
        else:
            del self._errors[new_count:]
        self._item_count = new_count
        if new_count == 0:
            self._focused_index = 0
        else:
            self._focused_index = max(0, min(self._focused_index, new_count - 1))

    @property
    def is_empty(self) -> bool:
        return self._item_count == 0

    def is_focused(self, index: int) -> bool:
        return index == self._focused_index

    def move_by(self, delta: int) -> None:
        if self._item_count == 0:
            return
        self._focused_index = (self._focused_index + delta) % self._item_count

    def move_up(self) -> None:
        self.move_by(-1)

    def move_down(self) -> None:
        self.move_by(1)

    move_previous = move_up
    move_next = move_down

    def jump_to(self, index: int) -> None:
        if self._item_count == 0:
            return
        self._focused_index = max(0, min(index, self._item_count - 1))

    def jump_to_first(self) -> None:
        self.jump_to(0)

    def jump_to_last(self) -> None:
        self.jump_to(self._item_count - 1)

    def reset(self, initial_index: int = 0, clear_errors: bool = True) -> None:
        if self._item_count == 0:
            self._focused_index = 0
        else:
            self._focused_index = max(0, min(initial_index, self._item_count - 1))
        if clear_errors:
            self.clear_all_errors()

    def get_error(self, index: int) -> str | None:
        if 0 <= index < len(self._errors):
            return self._errors[index]
        return None

    def set_error(self, index: int, error: str | None) -> None:
        if 0 <= index < len(self._errors):
            self._errors[index] = error or None

    def clear_error(self, index: int) -> None:
        self.set_error(index, None)

    def clear_all_errors(self) -> None:
        self._errors = [None] * self._item_count

    def has_error(self, index: int) -> bool:
        return bool(self.get_error(index))

    @property
    def focused_error(self) -> str | None:
        return self.get_error(self._focused_index)

    @property
    def focused_has_error(self) -> bool:
        return self.has_error(self._focused_index)

    @property
    def has_any_error(self) -> bool:
        return any(self._errors)

    @property
    def first_error_index(self) -> int | None:
        for index, error in enumerate(self._errors):
            if error:
                return index
        return None

    @property
    def error_count(self) -> int:
        return sum(1 for error in self._errors if error)

    def focus_first_error(self) -> bool:
        index = self.first_error_index
        if index is None:
            return False
        self._focused_index = index
        return True

    def validate_all(self, validator: Validator, focus_first_invalid: bool = True) -> bool:
        """Run ``validator`` on every item, record errors, and report overall validity."""
        first_invalid: int | None = None
        for index in range(self._item_count):
            error = validator(index)
            self.set_error(index, error)
            if error and first_invalid is None:
                first_invalid = index
        if focus_first_invalid and first_invalid is not None:
            self._focused_index = first_invalid
        return first_invalid is None

    def validate_one(self, index: int, validator: Validator) -> bool:
        error = validator(index)
        self.set_error(index, error)
        return not error

    def validate_focused(self, validator: Validator) -> bool:
        return self.validate_one(self._focused_index, validator)
