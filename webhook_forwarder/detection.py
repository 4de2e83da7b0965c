from typing import Any, Dict, Optional

from .constants import GRAFANA_PRIORITIES

GENERIC = "generic"
GRAFANA = "grafana"


def is_grafana_payload(raw: Dict[str, Any]) -> bool:
    # Só a presença da chave importa; o formato de 'alerts' não é validado
    return "alerts" in raw


def detect_dialect(raw: Dict[str, Any]) -> str:
    if is_grafana_payload(raw):
        return GRAFANA
    return GENERIC


def get_grafana_priority(status: Optional[str], state: Optional[str]) -> int:
    # firing/alerting tem precedência sobre resolved/ok
    if status == "firing" or state == "alerting":
        return GRAFANA_PRIORITIES["firing"]
    elif status == "resolved" or state == "ok":
        return GRAFANA_PRIORITIES["resolved"]
    return GRAFANA_PRIORITIES["default"]
