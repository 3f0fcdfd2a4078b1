"""
Terminal UI widgets built as immutable models, pure transitions and view functions.

Each widget module is its own namespace::

    from tw_widgets import table

    model = table.create(columns=[table.TableColumn(key="name", title="Name")])
    print(table.view(model))
"""

from tw_widgets.components import (
    keyhelp,
    progress,
    selectlist,
    spinner,
    table,
    textinput,
    timer,
    viewport,
)

__all__ = [
    "keyhelp",
    "progress",
    "selectlist",
    "spinner",
    "table",
    "textinput",
    "timer",
    "viewport",
]
