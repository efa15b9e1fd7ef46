from __future__ import annotations

import json
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger
from pydantic import BaseModel, Field

from core.config import Settings
from core.logging import WEBHOOK_RECEIVED, WEBHOOK_REJECTED, audit_log, configure_logging
from nodes.base import ExecutionContext, NodeExecutionData, NodeOperationError
from nodes.custom_trigger import CustomTrigger, WebhookRequest
from nodes.validator_node import MODE_ANNOTATE, ValidatorNode


class WorkflowDispatcher:
    """Receives the workflow data emitted by the trigger.

    Only the last `history` runs are kept; older ones are dropped.
    """

    def __init__(self, history: int = 100) -> None:
        if history <= 0:
            raise ValueError("history must be positive")
        self.runs: Deque[List[List[NodeExecutionData]]] = deque(maxlen=history)

    def dispatch(self, workflow_data: List[List[NodeExecutionData]], actor: str) -> None:
        self.runs.append(workflow_data)
        items = [item.to_dict() for branch in workflow_data for item in branch]
        logger.info("workflow triggered by {} with {} item(s)", actor, len(items))
        audit_log(WEBHOOK_RECEIVED, actor=actor, details={"items": items})


class ValidateFieldsRequest(BaseModel):
    fields: List[Dict[str, Any]]
    mode: Optional[str] = None
    items: List[Dict[str, Any]] = Field(default_factory=lambda: [{}])


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.load_from_env()
    configure_logging(settings.log_level, settings.audit_log_path)

    app = FastAPI(title="n8n-validator-nodes")
    trigger = CustomTrigger(path=settings.webhook_path)
    validator = ValidatorNode()
    app.state.settings = settings
    app.state.dispatcher = WorkflowDispatcher(settings.dispatch_history)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "webhook_path": trigger.path}

    @app.api_route(
        "/webhook/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    )
    async def webhook(path: str, request: Request) -> Response:
        if path.strip("/") != trigger.path:
            raise HTTPException(status_code=404, detail="webhook not found")

        raw = await request.body()
        if len(raw) > settings.max_payload_bytes:
            raise HTTPException(status_code=413, detail="payload too large")

        body: Any = None
        if raw and request.method.upper() == "POST":
            try:
                body = json.loads(raw)
            except ValueError:
                raise HTTPException(status_code=400, detail="request body must be JSON")

        result = await trigger.webhook(
            WebhookRequest(
                method=request.method,
                body=body,
                headers=dict(request.headers),
                query=dict(request.query_params),
            )
        )
        if result.workflow_data:
            app.state.dispatcher.dispatch(result.workflow_data, actor=trigger.description.name)
        elif result.reply.status_code >= 400:
            audit_log(
                WEBHOOK_REJECTED,
                actor=trigger.description.name,
                details={"method": request.method, "statusCode": result.reply.status_code},
                status="rejected",
            )

        reply = result.reply
        if isinstance(reply.body, str):
            return PlainTextResponse(reply.body, status_code=reply.status_code)
        return JSONResponse(reply.body, status_code=reply.status_code)

    @app.post("/tools/validate_fields")
    async def validate_fields(req: ValidateFieldsRequest) -> Dict[str, Any]:
        mode = req.mode or settings.validator_mode or MODE_ANNOTATE
        ctx = ExecutionContext(
            items=[NodeExecutionData.from_dict(item) for item in req.items],
            parameters={"nodeMode": mode, "inputs": {"inputFields": req.fields}},
            node_name=validator.description.defaults.get("name", validator.description.name),
        )
        try:
            output = await validator.execute(ctx)
        except NodeOperationError as exc:
            raise HTTPException(status_code=422, detail=exc.to_dict())
        return {"items": [item.to_dict() for item in output[0]]}

    return app
