"""Parsing of raw analyzer output into unvalidated findings."""

import json
import logging
from typing import Any, List, Tuple

from .errors import AnalyzerFailureError

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Analysis complete"


def strip_markdown_code_blocks(text: str) -> str:
    """Strip a surrounding ```json fence from analyzer text."""
    text = (text or "").strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _load_json_object(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Models sometimes wrap the object in prose
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            pass

    logger.error("Failed to parse lint JSON. Preview: %s", text[:500])
    raise AnalyzerFailureError(
        "Failed to parse lint results. The response may be incomplete or malformed."
    )


def parse_lint_response(content: str) -> Tuple[List[Any], str]:
    """
    Split analyzer output into raw findings and a summary.

    Individual findings are returned as-is; validating them is the engine's job.

    Raises:
        AnalyzerFailureError: when the output is empty or not a JSON document
    """
    text = strip_markdown_code_blocks(content)
    if not text:
        raise AnalyzerFailureError("Analyzer returned an empty response")

    payload = _load_json_object(text)

    if isinstance(payload, list):
        return payload, DEFAULT_SUMMARY
    if not isinstance(payload, dict):
        raise AnalyzerFailureError("Analyzer response is not a JSON object")

    findings = payload.get("violations")
    if findings is None:
        findings = []
    elif not isinstance(findings, list):
        logger.warning("Analyzer 'violations' field is %s, not a list; ignoring it", type(findings).__name__)
        findings = []

    summary = str(payload.get("summary") or "").strip() or DEFAULT_SUMMARY
    return findings, summary
