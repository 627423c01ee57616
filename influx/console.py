# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""Global console instances used by the Influx CLI entry facade."""
from rich.console import Console

console = Console()
error_console = Console(stderr=True)
