from __future__ import annotations

import pytest

from nodes.custom_trigger import CustomTrigger, WebhookRequest


@pytest.mark.asyncio
async def test_post_emits_body_as_workflow_data() -> None:
    trigger = CustomTrigger()
    result = await trigger.webhook(WebhookRequest(method="POST", body={"order": 7}))

    assert result.reply.status_code == 200
    assert result.reply.body == {"success": True}
    assert len(result.workflow_data) == 1
    assert [item.json for item in result.workflow_data[0]] == [{"order": 7}]


@pytest.mark.asyncio
async def test_post_with_non_object_body() -> None:
    result = await CustomTrigger().webhook(WebhookRequest(method="post", body=[1, 2]))
    assert result.reply.status_code == 200
    assert result.workflow_data[0][0].json == {"body": [1, 2]}


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_other_methods_rejected(method: str) -> None:
    result = await CustomTrigger().webhook(WebhookRequest(method=method, body={"x": 1}))
    assert result.reply.status_code == 405
    assert result.reply.body == "Method Not Allowed"
    assert result.workflow_data == []


@pytest.mark.asyncio
async def test_trigger_close_function_is_noop() -> None:
    response = await CustomTrigger().trigger()
    assert await response.close_function() is None


def test_description_registers_post_webhook() -> None:
    trigger = CustomTrigger(path="orders")
    (hook,) = trigger.description.webhooks
    assert hook.httpMethod == "POST"
    assert hook.responseMode == "onReceived"
    assert hook.path == "orders"
    assert trigger.description.inputs == []
    assert trigger.description.group == ["trigger"]
