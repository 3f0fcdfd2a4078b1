"""Plumbing shared by every widget: option records and named presets."""
