"""Widget event contract shared by the connect page and its host app.

The page script is rendered with these values; the host app receives
``{type: "pageReady" | "fastenEvent", data?, timestamp}`` messages through
the ``fastenConnect`` message handler or the parent window.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

BRIDGE_HANDLER_NAME: Final[str] = "fastenConnect"
WIDGET_EVENT_NAME: Final[str] = "eventBus"

READY_STATUS: Final[str] = "Ready to connect to healthcare provider"
ERROR_STATUS: Final[str] = "Error processing connection event"

SEARCH_QUERY_EVENT: Final[str] = "search.query"

STATUS_MESSAGES: Final[dict[str, str]] = {
    "patient.connection_pending": "Connection in progress...",
    "patient.connection_success": "Successfully connected to healthcare provider!",
    "patient.connection_failed": "Connection failed. Please try again.",
    "patient.export_success": "Health records export completed successfully!",
    "patient.export_failed": "Health records export failed. Please try again.",
    "widget.complete": "Widget completed successfully!",
}


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
