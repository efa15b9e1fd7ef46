from __future__ import annotations

import copy
import json
import sys
import time
from typing import Any, Dict, Optional

from loguru import logger


# Keys redacted from webhook payloads and node parameters before they are logged
SENSITIVE_FIELDS = {
	"password",
	"api_key",
	"apiKey",
	"secret",
	"token",
	"accessToken",
	"refreshToken",
	"authorization",
	"Authorization",
	"cookie",
	"Cookie",
	"x-api-key",
}

MAX_DEPTH = 10


def _sanitize_dict(obj: Any, depth: int = 0) -> Any:
	"""
	Return a copy of obj with sensitive keys replaced by "[REDACTED]".

	Nested dicts and lists are walked up to MAX_DEPTH levels.
	"""
	if depth > MAX_DEPTH:
		return "[MAX_DEPTH_EXCEEDED]"

	if isinstance(obj, dict):
		return {
			key: "[REDACTED]" if key in SENSITIVE_FIELDS else _sanitize_dict(value, depth + 1)
			for key, value in obj.items()
		}
	if isinstance(obj, list):
		return [_sanitize_dict(item, depth + 1) for item in obj]
	return obj


WEBHOOK_RECEIVED = "webhook_received"
WEBHOOK_REJECTED = "webhook_rejected"
ITEM_REJECTED = "item_rejected"

AUDIT_EVENTS = frozenset({WEBHOOK_RECEIVED, WEBHOOK_REJECTED, ITEM_REJECTED})


def _is_audit(record: Dict[str, Any]) -> bool:
	return bool(record["extra"].get("audit"))


def configure_logging(level: str = "info", audit_log_path: Optional[str] = None) -> None:
	"""
	Send application logs to stdout as JSON.

	With an audit_log_path, audit events go only to that file and are kept
	out of stdout, so webhook payloads are written once.
	"""
	level = level.upper()
	stdout_sink: Dict[str, Any] = {"sink": sys.stdout, "level": level, "serialize": True, "enqueue": True}
	handlers = [stdout_sink]
	if audit_log_path:
		stdout_sink["filter"] = lambda record: not _is_audit(record)
		handlers.append(
			{
				"sink": audit_log_path,
				"level": "INFO",
				"serialize": True,
				"enqueue": True,
				"filter": _is_audit,
			}
		)
	logger.configure(handlers=handlers, extra={"audit": False})


def audit_log(event: str, actor: str, details: Dict[str, Any], status: str = "ok") -> None:
	"""
	Record an audit event with sensitive data redacted.

	Args:
		event: One of AUDIT_EVENTS
		actor: Node that produced the event (e.g., "customTrigger")
		details: Event payload, redacted before it is written
		status: "ok" for accepted work, "rejected" otherwise

	Raises:
		ValueError: event is not one of AUDIT_EVENTS
	"""
	if event not in AUDIT_EVENTS:
		raise ValueError(f"unknown audit event: {event}")

	record = {
		"event": event,
		"actor": actor,
		"status": status,
		"details": _sanitize_dict(copy.deepcopy(details)),
		"timestamp": int(time.time() * 1000),
	}
	logger.bind(audit=True, event=event).info(json.dumps(record, default=str))
