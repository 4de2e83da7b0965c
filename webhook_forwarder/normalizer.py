"""Turns decoded webhook payloads into :class:`Notification` values.

Two dialects are understood. A payload carrying an ``alerts`` key is treated
as a Grafana contact-point webhook; anything else is a generic message with
``title``/``message``/``priority``/``extras``. Optional fields with the wrong
JSON type are treated as absent, only the generic body is mandatory.
"""

import logging
from typing import Any, Dict

from .constants import (
    DEFAULT_PRIORITY,
    DEFAULT_TITLE,
    GRAFANA_DEFAULT_MESSAGE,
    GRAFANA_DEFAULT_TITLE,
    GRAFANA_URL_FIELDS,
    MAX_PRIORITY,
    MIN_PRIORITY,
)
from .detection import GENERIC, GRAFANA, detect_dialect, get_grafana_priority
from .errors import MalformedPayloadError, MissingFieldError
from .models import Notification
from .utils import int_in_range_or_default, nonempty_string, object_or_empty, string_or_default

logger = logging.getLogger(__name__)


def normalize_generic(raw: Dict[str, Any]) -> Notification:
    title = nonempty_string(raw.get("title"))
    message = nonempty_string(raw.get("message"))
    if message is None:
        raise MissingFieldError("message")

    priority = int_in_range_or_default(raw.get("priority"), MIN_PRIORITY, MAX_PRIORITY, DEFAULT_PRIORITY)
    extras = object_or_empty(raw.get("extras"))

    return Notification(
        title=title or DEFAULT_TITLE,
        body=message,
        priority=priority,
        metadata=dict(extras),
    )


def normalize_grafana(raw: Dict[str, Any]) -> Notification:
    title = string_or_default(raw.get("title"), "")
    message = string_or_default(raw.get("message"), "")
    status = string_or_default(raw.get("status"), "")
    state = string_or_default(raw.get("state"), "")

    priority = get_grafana_priority(status, state)

    if not title:
        title = f"{GRAFANA_DEFAULT_TITLE}: {status}" if status else GRAFANA_DEFAULT_TITLE
    if not message:
        message = GRAFANA_DEFAULT_MESSAGE

    metadata: Dict[str, Any] = {"source": "grafana"}
    if status:
        metadata["status"] = status
    if state:
        metadata["state"] = state
    # URLs copiadas como vieram, sem validação de formato
    for key in GRAFANA_URL_FIELDS:
        url = nonempty_string(raw.get(key))
        if url:
            metadata[key] = url

    return Notification(title=title, body=message, priority=priority, metadata=metadata)


NORMALIZERS = {
    GENERIC: normalize_generic,
    GRAFANA: normalize_grafana,
}


def normalize(raw: Any) -> Notification:
    if not isinstance(raw, dict):
        raise MalformedPayloadError(details=f"expected a JSON object, got {type(raw).__name__}")
    dialect = detect_dialect(raw)
    logger.debug(f"Payload classificado como '{dialect}'")
    return NORMALIZERS[dialect](raw)
