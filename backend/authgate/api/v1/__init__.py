"""Version 1 of the HTTP API: the health probe and the authentication routes."""

from __future__ import annotations

from flask import Blueprint

from . import auth, health

API_VERSION = "v1"

# (blueprint, prefix relative to /api/v1)
REGISTRY: tuple[tuple[Blueprint, str], ...] = (
    (health.bp, ""),
    (auth.bp, "/auth"),
)
