from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    priority: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Dict[str, Any]:
        """Formato de mensagem aceito pela API do Gotify."""
        return {
            "title": self.title,
            "message": self.body,
            "priority": self.priority,
            "extras": dict(self.metadata),
        }


@dataclass(frozen=True)
class DeliveryOutcome:
    delivered: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "DeliveryOutcome":
        return cls(delivered=True)

    @classmethod
    def failed(cls, reason: str) -> "DeliveryOutcome":
        return cls(delivered=False, reason=reason)
