"""Shared rich console for progress and diagnostics (always stderr)."""

from rich.console import Console

# long paths and messages stay on one line
console = Console(stderr=True, soft_wrap=True)
