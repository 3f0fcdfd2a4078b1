"""Base class for widget option records."""

from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from tw_common.errors import ConfigurationError

logger = logging.getLogger(__name__)


class WidgetOptions(BaseModel):
    """Options accepted by a widget's ``create`` factory."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)


O = TypeVar("O", bound=WidgetOptions)


def resolve_options(cls: type[O], options: O | None, overrides: Mapping[str, Any]) -> O:
    """Build a validated options record from an optional base plus keyword overrides.

    Raises:
        ConfigurationError: if the merged options fail validation.
    """
    if options is not None and not overrides:
        return options
    data: dict[str, Any] = dict(options) if options is not None else {}
    data.update(overrides)
    try:
        return cls.model_validate(data)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        logger.debug("Rejected %s: %s", cls.__name__, errors)
        raise ConfigurationError(
            f"Invalid {cls.__name__}",
            context={"options": cls.__name__, "errors": errors},
            cause=exc,
        ) from exc
