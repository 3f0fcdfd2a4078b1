"""Text input widget: single-line editing with a cursor, mask and scroll window."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from pydantic import Field

from tw_widgets.core.options import WidgetOptions, resolve_options


class TextInputOptions(WidgetOptions):
    """Options for :func:`create`."""

    value: str = ""
    placeholder: str = ""
    max_length: int = Field(default=0, ge=0, description="0 means unlimited")
    mask: Optional[str] = Field(default=None, description="Glyph shown instead of each character")
    show_char_count: bool = False
    width: int = Field(default=0, ge=0, description="Visible width, 0 means no limit")
    prompt: str = ""
    cursor: str = "│"


@dataclass(frozen=True)
class TextInputModel:
    value: str
    cursor: int
    placeholder: str
    max_length: int
    mask: Optional[str]
    show_char_count: bool
    width: int
    prompt: str
    cursor_char: str
    focused: bool


def create(options: TextInputOptions | None = None, **overrides) -> TextInputModel:
    opts = resolve_options(TextInputOptions, options, overrides)
    value = opts.value
    if opts.max_length > 0:
        value = value[: opts.max_length]
    return TextInputModel(
        value=value,
        cursor=len(value),
        placeholder=opts.placeholder,
        max_length=opts.max_length,
        mask=opts.mask,
        show_char_count=opts.show_char_count,
        width=opts.width,
        prompt=opts.prompt,
        cursor_char=opts.cursor,
        focused=True,
    )


def set_value(model: TextInputModel, value: str) -> TextInputModel:
    """Replace the value, truncating to max_length and re-clamping the cursor."""
    if model.max_length > 0 and len(value) > model.max_length:
        value = value[: model.max_length]
    return replace(model, value=value, cursor=min(model.cursor, len(value)))


def focus(model: TextInputModel) -> TextInputModel:
    return replace(model, focused=True)


def blur(model: TextInputModel) -> TextInputModel:
    return replace(model, focused=False)


def set_cursor(model: TextInputModel, position: int) -> TextInputModel:
    return replace(model, cursor=max(0, min(position, len(model.value))))


def cursor_left(model: TextInputModel) -> TextInputModel:
    return set_cursor(model, model.cursor - 1)


def cursor_right(model: TextInputModel) -> TextInputModel:
    return set_cursor(model, model.cursor + 1)


def cursor_start(model: TextInputModel) -> TextInputModel:
    return set_cursor(model, 0)


def cursor_end(model: TextInputModel) -> TextInputModel:
    return set_cursor(model, len(model.value))


def insert(model: TextInputModel, char: str) -> TextInputModel:
    """Insert ``char`` (one or more characters) at the cursor."""
    if model.max_length > 0 and len(model.value) >= model.max_length:
        return model

    before = model.value[: model.cursor]
    after = model.value[model.cursor :]
    value = before + char + after
    if model.max_length > 0 and len(value) > model.max_length:
        value = value[: model.max_length]
    return replace(model, value=value, cursor=min(model.cursor + len(char), len(value)))


def backspace(model: TextInputModel) -> TextInputModel:
    if model.cursor == 0:
        return model
    value = model.value[: model.cursor - 1] + model.value[model.cursor :]
    return replace(model, value=value, cursor=model.cursor - 1)


def delete_char(model: TextInputModel) -> TextInputModel:
    """Delete the character under the cursor."""
    if model.cursor == len(model.value):
        return model
    value = model.value[: model.cursor] + model.value[model.cursor + 1 :]
    return replace(model, value=value)


def delete_word_backward(model: TextInputModel) -> TextInputModel:
    """Delete the word before the cursor, along with any whitespace after it."""
    if model.cursor == 0:
        return model

    before = model.value[: model.cursor]
    i = len(before) - 1
    while i >= 0 and before[i].isspace():
        i -= 1
    while i >= 0 and not before[i].isspace():
        i -= 1

    return replace(
        model,
        value=before[: i + 1] + model.value[model.cursor :],
        cursor=i + 1,
    )


def delete_to_end(model: TextInputModel) -> TextInputModel:
    return replace(model, value=model.value[: model.cursor])


def delete_to_start(model: TextInputModel) -> TextInputModel:
    return replace(model, value=model.value[model.cursor :], cursor=0)


def clear(model: TextInputModel) -> TextInputModel:
    return replace(model, value="", cursor=0)


def word_left(model: TextInputModel) -> TextInputModel:
    """Move the cursor to the start of the previous word."""
    if model.cursor == 0:
        return model

    value = model.value
    i = model.cursor - 1
    while i > 0 and value[i].isspace():
        i -= 1
    while i > 0 and not value[i - 1].isspace():
        i -= 1
    return set_cursor(model, i)


def word_right(model: TextInputModel) -> TextInputModel:
    """Move the cursor past the current word and the whitespace after it."""
    if model.cursor == len(model.value):
        return model

    value = model.value
    i = model.cursor
    while i < len(value) and not value[i].isspace():
        i += 1
    while i < len(value) and value[i].isspace():
        i += 1
    return set_cursor(model, i)


def _display_text(model: TextInputModel) -> str:
    if model.mask is not None:
        shown = model.mask * len(model.value)
    else:
        shown = model.value

    if not shown and model.placeholder and not model.focused:
        return model.placeholder

    if model.focused:
        if model.mask is not None:
            before = model.mask * model.cursor
            after = model.mask * (len(model.value) - model.cursor)
        else:
            before = shown[: model.cursor]
            after = shown[model.cursor :]
        return before + model.cursor_char + after
    return shown


def view(model: TextInputModel) -> str:
    shown = _display_text(model)

    if model.width > 0:
        if len(shown) > model.width:
            # slide the window so the cursor stays visible
            cursor_end_pos = model.cursor + (len(model.cursor_char) if model.focused else 0)
            if cursor_end_pos > model.width:
                offset = cursor_end_pos - model.width
                shown = shown[offset : offset + model.width]
            else:
                shown = shown[: model.width]
        else:
            shown = shown.ljust(model.width)

    result = model.prompt + shown
    if model.show_char_count and model.max_length > 0:
        result += f" {len(model.value)}/{model.max_length}"
    return result
