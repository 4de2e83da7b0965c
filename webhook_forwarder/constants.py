import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "5001"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Destinatário (um por instância) e prefixo das rotas, ex: /plugin/5/custom/<token>
RECIPIENT_NAME = os.getenv("RECIPIENT_NAME", "default")
WEBHOOK_BASE_PATH = os.getenv("WEBHOOK_BASE_PATH", "").rstrip("/")

# Canal de entrega: 'gotify' | 'discord'
SINK_TYPE = os.getenv("SINK_TYPE", "gotify").strip().lower()
GOTIFY_URL = os.getenv("GOTIFY_URL")
GOTIFY_APP_TOKEN = os.getenv("GOTIFY_APP_TOKEN")
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL")
SINK_TIMEOUT_SECONDS = int(os.getenv("SINK_TIMEOUT_SECONDS", "5"))

# Política de normalização
DEFAULT_TITLE = "Webhook Message"
DEFAULT_PRIORITY = 5
MIN_PRIORITY = 1
MAX_PRIORITY = 10

GRAFANA_DEFAULT_TITLE = "Grafana Alert"
GRAFANA_DEFAULT_MESSAGE = "Alert notification from Grafana"
GRAFANA_URL_FIELDS = ("externalURL", "dashboardURL", "silenceURL")

GRAFANA_PRIORITIES = {
    "firing": 8,
    "resolved": 3,
    "default": DEFAULT_PRIORITY,
}

PLUGIN_INFO = {
    "module_path": "github.com/gotify/webhook-forwarder",
    "version": "1.0.0",
    "author": "Gotify Community",
    "website": "https://github.com/gotify/webhook-forwarder",
    "description": (
        "Advanced webhook forwarder with native Grafana support. Receives webhook messages "
        "from external services and forwards them as notifications. Automatically detects "
        "and properly formats Grafana alerts with smart priority assignment."
    ),
    "license": "MIT",
    "name": "Webhook Forwarder",
}

# Cores do embed do Discord por faixa de prioridade
PRIORITY_COLORS = {
    "low": int(os.getenv("LOW_PRIORITY_COLOR", "32768")),
    "normal": int(os.getenv("NORMAL_PRIORITY_COLOR", "16776960")),
    "high": int(os.getenv("HIGH_PRIORITY_COLOR", "16753920")),
    "critical": int(os.getenv("CRITICAL_PRIORITY_COLOR", "16711680")),
}
