from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger

from nodes.base import (
    NodeDescription,
    NodeExecutionData,
    WebhookDescription,
    return_json_array,
)

DEFAULT_WEBHOOK_PATH = "custom-webhook"


@dataclass
class WebhookRequest:
    method: str
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)


@dataclass
class WebhookReply:
    status_code: int
    body: Any


@dataclass
class WebhookResponseData:
    reply: WebhookReply
    workflow_data: List[List[NodeExecutionData]] = field(default_factory=list)


async def _noop() -> None:
    return None


@dataclass
class TriggerResponse:
    close_function: Callable[[], Awaitable[None]] = _noop


class CustomTrigger:
    """Starts the workflow when a POST request hits the webhook."""

    def __init__(self, path: str = DEFAULT_WEBHOOK_PATH) -> None:
        self.path = path
        self.description = NodeDescription(
            displayName="Custom Trigger",
            name="customTrigger",
            group=["trigger"],
            version=1,
            description="Starts the workflow when a POST request is received",
            defaults={"name": "Custom Trigger", "color": "#1A82E2"},
            inputs=[],
            outputs=["main"],
            webhooks=[
                WebhookDescription(
                    name="default",
                    httpMethod="POST",
                    responseMode="onReceived",
                    path=path,
                )
            ],
        )

    async def webhook(self, request: WebhookRequest) -> WebhookResponseData:
        if request.method.upper() != "POST":
            logger.info("rejected {} request on webhook {}", request.method, self.path)
            return WebhookResponseData(
                reply=WebhookReply(status_code=405, body="Method Not Allowed"),
                workflow_data=[],
            )

        data: Optional[Any] = request.body
        # a workflow item's json is always an object
        payload = data if isinstance(data, dict) else {"body": data}
        return WebhookResponseData(
            reply=WebhookReply(status_code=200, body={"success": True}),
            workflow_data=[return_json_array([payload])],
        )

    async def trigger(self) -> TriggerResponse:
        # the host owns webhook registration; nothing to tear down here
        return TriggerResponse()
