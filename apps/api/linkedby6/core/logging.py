from __future__ import annotations

import logging
import sys

from linkedby6.core.config import get_settings

_RESERVED_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Formats `extra={...}` fields as trailing key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} {rendered}"


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    root = logging.getLogger()
    resolved = (level or settings.log_level or "INFO").upper()
    root.setLevel(resolved)

    for handler in root.handlers:
        if getattr(handler, "_linkedby6_handler", False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler._linkedby6_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
