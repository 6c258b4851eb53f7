"""
Type-safe Quart application class for the SWAPI aggregator.

Replaces setattr()/getattr() access to app-level infrastructure with typed
attributes.
"""

from __future__ import annotations

from typing import Any

from dishka import AsyncContainer
from quart import Quart


class SwapiServiceApp(Quart):
    """Quart application with guaranteed dependency injection infrastructure.

    GUARANTEED INFRASTRUCTURE (Non-Optional):
        container: Dishka async container for dependency injection
        extensions: Standard Quart extensions dictionary

    Examples:
        >>> def create_app() -> SwapiServiceApp:
        ...     app = SwapiServiceApp(__name__)
        ...     app.container = make_async_container(...)
        ...     return app
    """

    container: AsyncContainer
    """Dishka async container, closed when the app stops serving."""

    extensions: dict[str, Any]
    """Standard Quart extensions dictionary (metrics live under "metrics")."""

    def __init__(self, import_name: str, *args: Any, **kwargs: Any) -> None:
        super().__init__(import_name, *args, **kwargs)
        self.extensions = {}
