from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..common.http import ThreadLocalSession
from ..core.constants import DEFAULT_ORACLE_MODEL, DEFAULT_ORACLE_TIMEOUT_SECONDS, DEFAULT_ORACLE_URL
from ..core.exceptions import ComparisonError, ConfigurationError
from .model import FaceVerdict
from .oracle import SimilarityOracle, parse_verdict

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a face recognition system. Compare two face images and determine if they are the same person.

Analyze facial features including:
- Face shape and structure
- Eye shape, size, and positioning
- Nose shape and size
- Mouth and lip structure
- Overall facial proportions

Account for differences in:
- Lighting conditions
- Camera angle
- Image quality

Respond with a JSON object containing:
- "match": true or false
- "confidence": a number from 0 to 100 representing how confident you are
- "reason": brief explanation

IMPORTANT: Only return the JSON object, no other text."""

USER_PROMPT = (
    "Compare these two face images and determine if they are the same person. "
    "Image 1 is the captured image, Image 2 is the registered face."
)


@dataclass(frozen=True)
class OracleConfig:
    url: str = DEFAULT_ORACLE_URL
    api_key: Optional[str] = None
    model: str = DEFAULT_ORACLE_MODEL
    timeout_seconds: float = DEFAULT_ORACLE_TIMEOUT_SECONDS


class GatewaySimilarityOracle(SimilarityOracle):
    """Similarity oracle backed by an OpenAI-compatible chat completions gateway
    with a vision-capable model."""

    def __init__(self, config: OracleConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._sessions = ThreadLocalSession(session)

    def ensure_configured(self) -> None:
        if not self._config.api_key:
            raise ConfigurationError("Face comparison API key is not configured")
        if not self._config.url:
            raise ConfigurationError("Face comparison URL is not configured")

    def build_payload(self, probe: str, reference: str) -> dict:
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_PROMPT},
                        {"type": "image_url", "image_url": {"url": probe}},
                        {"type": "image_url", "image_url": {"url": reference}},
                    ],
                },
            ],
        }

    def compare(self, probe: str, reference: str) -> FaceVerdict:
        self.ensure_configured()
        try:
            response = self._sessions.get().post(
                self._config.url,
                json=self.build_payload(probe, reference),
                headers={"Authorization": f"Bearer {self._config.api_key}"},
                timeout=self._config.timeout_seconds,
            )
        except requests.Timeout as e:
            raise ComparisonError(f"Face comparison timed out after {self._config.timeout_seconds}s") from e
        except requests.RequestException as e:
            raise ComparisonError(f"Face comparison request failed: {e}") from e

        if not response.ok:
            raise ComparisonError(f"Face comparison API error {response.status_code}: {response.text[:200]}")

        try:
            body = response.json()
        except ValueError as e:
            raise ComparisonError("Face comparison API returned non-JSON body") from e

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content or not isinstance(content, str):
            raise ComparisonError("No content in face comparison response")

        verdict = parse_verdict(content)
        logger.debug("Verdict match=%s confidence=%.1f reason=%s", verdict.match, verdict.confidence, verdict.reason)
        return verdict
