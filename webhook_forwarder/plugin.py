"""Adapter between the forwarder and the host that mounts it.

Holds the per-recipient context (user name, message handler) and renders the
informational documents. Normalization and delivery live elsewhere.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from .constants import PLUGIN_INFO
from .services import DeliverySink

logger = logging.getLogger(__name__)

PLACEHOLDER_PLUGIN_PATH = "/plugin/YOUR_PLUGIN_ID/custom/YOUR_USER_TOKEN"

FEATURES = [
    "Generic webhook support",
    "Grafana webhook auto-detection",
    "Smart priority assignment",
    "URL preservation for Grafana alerts",
]

DISPLAY_TEMPLATE = """# Webhook Forwarder Plugin

## Webhook Endpoint
POST {webhook_url}

## Usage

### Generic Webhooks
Send JSON payload with message content:

```bash
curl -X POST {webhook_url} \\
  -H "Content-Type: application/json" \\
  -d '{{
    "title": "Alert Title",
    "message": "Your message here",
    "priority": 5
  }}'
```

### Grafana Integration
1. In Grafana, go to Alerting > Contact Points
2. Add new contact point with type "webhook"
3. Set URL to: {webhook_url}
4. Set method to POST
5. Save configuration

Grafana alerts are automatically detected and formatted with appropriate priority levels.

## Supported Fields

| Field | Required | Default | Description |
|-------|----------|---------|-------------|
| message | Yes | - | Message content |
| title | No | "Webhook Message" | Message title |
| priority | No | 5 | Priority level (1-10) |
| extras | No | {{}} | Custom data |

## Priority Levels
- 1-2: Low (resolved alerts)
- 3-5: Normal
- 6-8: High (firing alerts)
- 9-10: Critical

Grafana alerts automatically receive priority 8 when firing and priority 3 when resolved.

Active user: {user}"""


def get_plugin_info() -> Dict[str, str]:
    return dict(PLUGIN_INFO)


class WebhookForwarderPlugin:
    def __init__(self, user_name: str, msg_handler: Optional[DeliverySink] = None):
        self.user_name = user_name
        self.msg_handler = msg_handler
        self.enabled = False

    def set_message_handler(self, handler: Optional[DeliverySink]):
        self.msg_handler = handler

    def enable(self):
        self.enabled = True
        logger.info(f"Plugin habilitado para '{self.user_name}'")

    def disable(self):
        self.enabled = False
        logger.info(f"Plugin desabilitado para '{self.user_name}'")

    def get_display(self, location: Optional[str]) -> str:
        """Página de instruções com a URL absoluta do webhook deste usuário.

        ``location`` é a URL da própria página, ex:
        ``https://gotify.example.com/plugin/5/custom/<token>/display``.
        """
        base_url = ""
        plugin_path = PLACEHOLDER_PLUGIN_PATH
        if location:
            parts = urlsplit(location)
            if parts.scheme and parts.netloc:
                base_url = f"{parts.scheme}://{parts.netloc}"
            if parts.path and "/display" in parts.path:
                plugin_path = parts.path
                if plugin_path.endswith("/display"):
                    plugin_path = plugin_path[: -len("/display")]

        return DISPLAY_TEMPLATE.format(
            webhook_url=f"{base_url}{plugin_path}/message",
            user=self.user_name,
        )

    def info_document(self, path: str, host: str) -> Dict[str, Any]:
        # path é o caminho da rota de info, sempre terminado em '/'
        if not path.endswith("/"):
            path = path + "/"
        info = get_plugin_info()
        return {
            "plugin": info["name"],
            "version": info["version"],
            "user": self.user_name,
            "features": list(FEATURES),
            "endpoints": {
                "send_message": {
                    "method": "POST",
                    "path": path + "message",
                    "description": (
                        "Send a message to this user. Supports both generic webhooks and Grafana alerts."
                    ),
                    "generic_payload": {
                        "title": "string (optional, defaults to 'Webhook Message')",
                        "message": "string (required)",
                        "priority": "int (optional, 1-10, default: 5)",
                        "extras": "object (optional, custom data)",
                    },
                    "grafana_support": (
                        "Automatically detected when 'alerts' field is present. "
                        "Priority auto-assigned: firing=8, resolved=3"
                    ),
                    "example_generic": {
                        "title": "System Alert",
                        "message": "Disk usage exceeded 90%",
                        "priority": 8,
                    },
                    "example_grafana": {
                        "title": "[FIRING:1] HighCPU",
                        "status": "firing",
                        "state": "alerting",
                        "message": "CPU usage above 90%",
                        "alerts": [],
                    },
                    "example_curl": (
                        f"curl -X POST {host}{path}message -H 'Content-Type: application/json' "
                        "-d '{\"message\":\"Test alert\",\"priority\":5}'"
                    ),
                },
                "display": {
                    "method": "GET",
                    "path": path + "display",
                    "description": "Human readable setup instructions",
                },
                "info": {
                    "method": "GET",
                    "path": path,
                    "description": "Get this plugin information and usage examples",
                },
            },
        }
