"""
Delivery envelope handed to the downstream event consumer
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict


ResponseHandler = Callable[[Any], None]


@dataclass(frozen=True)
class DeliveryEnvelope:
    """A normalized webhook event packaged for the event consumer"""

    id: str
    plugin_id: str
    timestamp: int
    content: str
    raw_message: str
    helpful_instruction: str
    response_handler: ResponseHandler
    type: str = "user_input"
    action: str = "receive_github_webhook"
    user: str = "webhook"
    platform: str = "github"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the envelope, without the response handler"""
        return {
            "id": self.id,
            "plugin_id": self.plugin_id,
            "type": self.type,
            "action": self.action,
            "timestamp": self.timestamp,
            "content": self.content,
            "raw_message": self.raw_message,
            "user": self.user,
            "helpful_instruction": self.helpful_instruction,
            "platform": self.platform,
            "metadata": self.metadata,
        }
