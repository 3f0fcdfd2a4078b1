"""Widget modules: one immutable model plus its transitions and views per module."""
