# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Property store used as the last fallback for option values.

When an option declares `env` and no token supplies it, the binder reads the
process environment first and then this store.

Typical Usage:
    properties = PropertyStore({"INFLUX_TOKEN": "secret"})
    properties.set("INFLUX_URL", "http://localhost:8086")
    cli = InfluxCli(properties=properties)
"""
from __future__ import annotations

from typing import Any, Mapping

from influx.logger import logger


class PropertyStore:
    """Holds configuration properties keyed by the `env` name of an option."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self.properties: dict[str, Any] = {}
        if values:
            self.update(values)

    def update(self, values: Mapping[str, Any]) -> None:
        """Load every key of `values` into the store."""
        self.properties.update(values)
        logger.debug("Loaded %d properties", len(values))

    def get(self, name: str, default: Any = None) -> Any:
        """Get the value of a property."""
        return self.properties.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set the value of a property."""
        self.properties[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.properties
