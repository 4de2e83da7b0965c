import logging
from typing import Any, Dict, Optional

import requests

from .constants import (
    DISCORD_WEBHOOK_URL,
    GOTIFY_APP_TOKEN,
    GOTIFY_URL,
    PRIORITY_COLORS,
    SINK_TIMEOUT_SECONDS,
    SINK_TYPE,
)
from .errors import SendFailedError, SinkUnavailableError
from .models import DeliveryOutcome, Notification
from .utils import priority_band

logger = logging.getLogger(__name__)


class DeliverySink:
    """Canal de entrega: ``send`` levanta exceção em caso de falha."""

    def send(self, title: str, body: str, priority: int, metadata: Dict[str, Any]) -> None:
        raise NotImplementedError


class GotifySink(DeliverySink):
    def __init__(self, base_url: str, app_token: str, timeout: int = SINK_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.app_token = app_token
        self.timeout = timeout

    def send(self, title, body, priority, metadata):
        message = Notification(title, body, priority, metadata or {}).to_message()
        resp = requests.post(
            f"{self.base_url}/message",
            json=message,
            headers={"X-Gotify-Key": self.app_token},
            timeout=self.timeout,
        )
        logger.debug(f"Gotify response: {resp.status_code}")
        resp.raise_for_status()


# Limites de embed do Discord
DISCORD_TITLE_LIMIT = 256
DISCORD_DESCRIPTION_LIMIT = 4096
DISCORD_FIELD_NAME_LIMIT = 256
DISCORD_FIELD_VALUE_LIMIT = 1024
DISCORD_MAX_FIELDS = 25


def _truncate(text, limit):
    text = str(text)
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class DiscordSink(DeliverySink):
    def __init__(self, webhook_url: str, timeout: int = SINK_TIMEOUT_SECONDS):
        self.webhook_url = webhook_url
        self.timeout = timeout

    def build_payload(self, title, body, priority, metadata):
        embed = {
            "title": _truncate(title, DISCORD_TITLE_LIMIT),
            "description": _truncate(body, DISCORD_DESCRIPTION_LIMIT),
            "color": PRIORITY_COLORS[priority_band(priority)],
            "fields": [
                {"name": "Priority", "value": str(priority), "inline": True},
            ],
        }
        for key, value in (metadata or {}).items():
            # Discord rejeita nome ou valor vazio
            embed["fields"].append({
                "name": _truncate(key, DISCORD_FIELD_NAME_LIMIT) or "-",
                "value": _truncate(value, DISCORD_FIELD_VALUE_LIMIT) or "-",
                "inline": True,
            })
        embed["fields"] = embed["fields"][:DISCORD_MAX_FIELDS]
        return {"embeds": [embed]}

    def send(self, title, body, priority, metadata):
        resp = requests.post(
            self.webhook_url,
            json=self.build_payload(title, body, priority, metadata),
            timeout=self.timeout,
        )
        if resp.status_code != 204:
            logger.debug(f"Discord response: {resp.status_code} {resp.text}")
        resp.raise_for_status()


def build_sink_from_env() -> Optional[DeliverySink]:
    if SINK_TYPE == "gotify":
        if GOTIFY_URL and GOTIFY_APP_TOKEN:
            return GotifySink(GOTIFY_URL, GOTIFY_APP_TOKEN)
    elif SINK_TYPE == "discord":
        if DISCORD_WEBHOOK_URL:
            return DiscordSink(DISCORD_WEBHOOK_URL)
    else:
        logger.warning(f"SINK_TYPE desconhecido: '{SINK_TYPE}'")
        return None
    logger.warning(f"Sink '{SINK_TYPE}' não configurado; entregas retornarão 503")
    return None


def deliver(
    notification: Notification,
    sink: Optional[DeliverySink],
    failure_message: str = "Failed to forward message",
) -> DeliveryOutcome:
    if sink is None:
        raise SinkUnavailableError()

    try:
        sink.send(notification.title, notification.body, notification.priority, notification.metadata)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Falha ao entregar '{notification.title}': {exc}")
        raise SendFailedError(str(exc), message=failure_message) from exc

    return DeliveryOutcome.ok()
