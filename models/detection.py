"""Detection domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DetectionRequest:
	"""One uploaded image bound for the detection service.

	The scan id is generated once and reused if the submission is retried.
	"""

	image_bytes: bytes
	filename: str
	content_type: str = "application/octet-stream"
	sandbox: bool = False
	scan_id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(frozen=True)
class DetectionResult:
	"""Verdict extracted from a successful detection response."""

	ai_percentage: float
	human_percentage: float
	width: Optional[int] = None
	height: Optional[int] = None


@dataclass(frozen=True)
class DetectionOutcome:
	"""Parsed result plus the upstream payload it came from."""

	request: DetectionRequest
	result: DetectionResult
	payload: Dict[str, Any]

	def as_response(self) -> Dict[str, Any]:
		"""Return the upstream payload with the relay's computed fields added."""
		return {
			**self.payload,
			"scanId": self.request.scan_id,
			"aiPercentage": self.result.ai_percentage,
			"humanPercentage": self.result.human_percentage,
		}
