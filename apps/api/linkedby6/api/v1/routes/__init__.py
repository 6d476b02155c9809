"""Version 1 HTTP routes: health, connection paths and recommendations."""

__all__ = [
    "connections",
    "health",
    "recommendations",
]
