"""Shared type aliases for template values and JSON-like payloads."""

from __future__ import annotations

from typing import TypeAlias

# Form answers arrive as arbitrary JSON (multi-select answers are lists)
JsonValue: TypeAlias = object

VariableMap: TypeAlias = dict[str, JsonValue]
