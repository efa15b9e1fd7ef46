from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

VALIDATOR_MODES = ("output-validation", "output-items")


@dataclass(frozen=True)
class Settings:
	"""Environment-driven configuration for the node host."""

	# webhook
	webhook_path: str = "custom-webhook"
	max_payload_bytes: int = 1_048_576
	# most recent trigger runs kept in memory by the dispatcher
	dispatch_history: int = 100

	# validator
	validator_mode: str = "output-validation"

	# ops
	log_level: str = "info"
	audit_log_path: Optional[str] = None

	@staticmethod
	def load_from_env() -> "Settings":
		load_dotenv()

		webhook_path = os.getenv("WEBHOOK_PATH", "custom-webhook").strip("/")
		max_payload = int(os.getenv("MAX_PAYLOAD_BYTES", str(1_048_576)))
		dispatch_history = int(os.getenv("DISPATCH_HISTORY", "100"))
		validator_mode = os.getenv("VALIDATOR_MODE", "output-validation")
		log_level = os.getenv("LOG_LEVEL", "info")
		audit_log_path = os.getenv("AUDIT_LOG_PATH")

		if not webhook_path:
			raise RuntimeError("WEBHOOK_PATH must not be empty")
		if max_payload <= 0:
			raise RuntimeError("MAX_PAYLOAD_BYTES must be positive")
		if dispatch_history <= 0:
			raise RuntimeError("DISPATCH_HISTORY must be positive")
		if validator_mode not in VALIDATOR_MODES:
			raise RuntimeError(
				f"VALIDATOR_MODE must be one of: {', '.join(VALIDATOR_MODES)}"
			)

		return Settings(
			webhook_path=webhook_path,
			max_payload_bytes=max_payload,
			dispatch_history=dispatch_history,
			validator_mode=validator_mode,
			log_level=log_level,
			audit_log_path=audit_log_path,
		)
