"""Configuration helpers."""

from tw_common.config.env import (
    env_name,
    parse_bool_env,
    parse_int_env,
    read_bool_env,
    read_env,
    read_int_env,
)

__all__ = [
    "env_name",
    "parse_bool_env",
    "parse_int_env",
    "read_bool_env",
    "read_env",
    "read_int_env",
]
