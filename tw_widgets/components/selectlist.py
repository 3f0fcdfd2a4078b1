"""Selectable list widget.

The model tracks three things: the items, the selected index and the scroll
offset of the visible window. Every navigation transition works the same way:

1. compute a candidate index for the operation (step, page jump, first/last);
2. if the candidate is disabled, keep stepping in the same direction until an
   enabled item turns up, visiting each item at most once;
3. store the new selection and scroll the window by the smallest amount that
   keeps it visible.

A transition that cannot find a valid target returns the model unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterable, Literal, Mapping, Optional, TypeVar

from pydantic import Field, InstanceOf, field_validator
from rapidfuzz import fuzz, process, utils

from tw_widgets.core.options import WidgetOptions, resolve_options

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
DISABLED_SUFFIX = " (disabled)"
DESCRIPTION_INDENT = "  "


@dataclass(frozen=True)
class ListItem(Generic[T]):
    title: str
    description: Optional[str] = None
    value: Optional[T] = None
    disabled: bool = False

    def search_blob(self) -> str:
        return " ".join(part for part in (self.title, self.description) if part)


ItemRenderer = Callable[[ListItem[T], bool, int], str]


def coerce_item(raw: Any) -> ListItem:
    """Accept a ListItem, a bare title string or a mapping of ListItem fields."""
    if isinstance(raw, ListItem):
        return raw
    if isinstance(raw, str):
        return ListItem(title=raw)
    if isinstance(raw, Mapping):
        return ListItem(**raw)
    raise ValueError(f"cannot build a list item from {type(raw).__name__}")


class ListOptions(WidgetOptions):
    """Options for :func:`create`."""

    items: tuple[InstanceOf[ListItem], ...] = ()
    selected: int = 0
    height: int = Field(default=0, ge=0, description="Visible rows, 0 shows every item")
    cursor: str = "> "
    uncursor: str = "  "
    show_descriptions: bool = False
    wrap: bool = True

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return value
        try:
            return tuple(coerce_item(raw) for raw in value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc


@dataclass(frozen=True)
class ListModel(Generic[T]):
    items: tuple[ListItem[T], ...]
    selected: int
    height: int
    offset: int
    cursor: str
    uncursor: str
    show_descriptions: bool
    wrap: bool


def create(options: ListOptions | None = None, **overrides) -> ListModel:
    opts = resolve_options(ListOptions, options, overrides)
    items = tuple(opts.items)
    model = ListModel(
        items=items,
        selected=_clamp_index(opts.selected, len(items)),
        height=opts.height,
        offset=0,
        cursor=opts.cursor,
        uncursor=opts.uncursor,
        show_descriptions=opts.show_descriptions,
        wrap=opts.wrap,
    )
    return _scroll_to_selection(model)


def _clamp_index(index: int, count: int) -> int:
    return max(0, min(index, count - 1))


def _scroll_to_selection(model: ListModel[T]) -> ListModel[T]:
    """Move the window by the minimum amount that keeps the selection visible."""
    if model.height == 0:
        return model if model.offset == 0 else replace(model, offset=0)

    offset = model.offset
    if model.selected >= offset + model.height:
        offset = model.selected - model.height + 1
    if model.selected < offset:
        offset = model.selected
    offset = max(0, min(offset, max(0, len(model.items) - model.height)))

    if offset == model.offset:
        return model
    return replace(model, offset=offset)


def _select_index(model: ListModel[T], index: int) -> ListModel[T]:
    if index == model.selected:
        return _scroll_to_selection(model)
    return _scroll_to_selection(replace(model, selected=index))


def _step(model: ListModel[T], index: int, delta: int) -> int:
    count = len(model.items)
    candidate = index + delta
    if 0 <= candidate < count:
        return candidate
    if model.wrap:
        return candidate % count
    return 0 if candidate < 0 else count - 1


def _move(model: ListModel[T], delta: int) -> ListModel[T]:
    count = len(model.items)
    if count == 0:
        return model

    candidate = _step(model, model.selected, delta)
    attempts = 0
    while model.items[candidate].disabled and attempts < count:
        candidate = _step(model, candidate, delta)
        attempts += 1

    if model.items[candidate].disabled:
        logger.debug("No enabled item reachable from index %d", model.selected)
        return model
    return _select_index(model, candidate)


def set_items(model: ListModel[T], items: Iterable[ListItem[T]]) -> ListModel[T]:
    """Replace every item; the selection is clamped and the window restarts at the top."""
    new_items = tuple(coerce_item(item) for item in items)
    updated = replace(
        model,
        items=new_items,
        selected=_clamp_index(model.selected, len(new_items)),
        offset=0,
    )
    return _scroll_to_selection(updated)


def move_up(model: ListModel[T]) -> ListModel[T]:
    return _move(model, -1)


def move_down(model: ListModel[T]) -> ListModel[T]:
    return _move(model, 1)


def move_to_start(model: ListModel[T]) -> ListModel[T]:
    for index, item in enumerate(model.items):
        if not item.disabled:
            return _select_index(model, index)
    return model


def move_to_end(model: ListModel[T]) -> ListModel[T]:
    for index in range(len(model.items) - 1, -1, -1):
        if not model.items[index].disabled:
            return _select_index(model, index)
    return model


def move_by_page(model: ListModel[T], direction: Literal["up", "down"]) -> ListModel[T]:
    """Jump a page (the visible height, or 10 rows when unbounded) up or down.

    Unlike :func:`move_up`/:func:`move_down` this never wraps: a disabled
    landing spot is walked past in the jump direction, and if that walk runs
    off the list the model is returned unchanged.
    """
    count = len(model.items)
    if count == 0:
        return model
    if direction not in ("up", "down"):
        logger.debug("Ignoring page move in unknown direction %r", direction)
        return model

    page_size = model.height if model.height > 0 else DEFAULT_PAGE_SIZE
    step = -1 if direction == "up" else 1
    candidate = _clamp_index(model.selected + step * page_size, count)

    while model.items[candidate].disabled:
        candidate += step
        if candidate < 0 or candidate >= count:
            logger.debug("Page %s from %d found no enabled item", direction, model.selected)
            return model

    return _select_index(model, candidate)


def select(model: ListModel[T], index: int) -> ListModel[T]:
    """Select ``index`` exactly; out-of-range or disabled targets are ignored."""
    if index < 0 or index >= len(model.items):
        logger.debug("Ignoring select of out-of-range index %d", index)
        return model
    if model.items[index].disabled:
        logger.debug("Ignoring select of disabled index %d", index)
        return model
    return _select_index(model, index)


def get_selected(model: ListModel[T]) -> Optional[ListItem[T]]:
    if 0 <= model.selected < len(model.items):
        return model.items[model.selected]
    return None


def get_selected_value(model: ListModel[T]) -> Optional[T]:
    item = get_selected(model)
    return item.value if item is not None else None


def _reset_with(model: ListModel[T], items: Iterable[ListItem[T]]) -> ListModel[T]:
    return replace(model, items=tuple(items), selected=0, offset=0)


def filter(  # noqa: A001
    model: ListModel[T], predicate: Callable[[ListItem[T]], bool]
) -> ListModel[T]:
    """Keep the items matching ``predicate``; the selection goes back to the first row."""
    return _reset_with(model, [item for item in model.items if predicate(item)])


def filter_by_title(model: ListModel[T], query: str) -> ListModel[T]:
    """Case-insensitive substring filter on item titles."""
    lowered = query.lower()
    return filter(model, lambda item: lowered in item.title.lower())


def filter_fuzzy(
    model: ListModel[T],
    query: str,
    *,
    score_cutoff: int = 50,
    limit: Optional[int] = None,
) -> ListModel[T]:
    """Keep items fuzzily matching ``query``, best match first.

    An empty query keeps every item in its original order.
    """
    query = query.strip()
    if not query:
        return _reset_with(model, model.items)

    choices = [item.search_blob() for item in model.items]
    matches = process.extract(
        query,
        choices,
        scorer=fuzz.WRatio,
        processor=utils.default_process,
        limit=limit,
        score_cutoff=score_cutoff,
    )
    # matches is a list of (choice, score, index)
    return _reset_with(model, [model.items[match[2]] for match in matches])


def _visible_range(model: ListModel[T]) -> range:
    if model.height > 0:
        end = min(model.offset + model.height, len(model.items))
    else:
        end = len(model.items)
    return range(model.offset, end)


def view(model: ListModel[T]) -> str:
    lines: list[str] = []
    for index in _visible_range(model):
        item = model.items[index]
        marker = model.cursor if index == model.selected else model.uncursor
        line = marker + item.title
        if item.disabled:
            line += DISABLED_SUFFIX
        lines.append(line)
        if model.show_descriptions and item.description:
            lines.append(model.uncursor + DESCRIPTION_INDENT + item.description)
    return "\n".join(lines)


def view_with(model: ListModel[T], render_item: ItemRenderer) -> str:
    """Render the visible window with ``render_item(item, is_selected, index)``."""
    return "\n".join(
        render_item(model.items[index], index == model.selected, index)
        for index in _visible_range(model)
    )
