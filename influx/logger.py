# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""Global logger instance for Influx CLI."""
import logging

logger: logging.Logger = logging.getLogger("influx")
