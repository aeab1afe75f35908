"""Gymnasium environments for TTrYs."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default single-board environment
register(
    id="TTrYs-v0",
    entry_point="ttrys.env.ttrys_env:TTrYsEnv",
)

__all__ = ["TTrYs-v0"]
