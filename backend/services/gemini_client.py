import logging
from typing import Any, Dict, Optional

import requests

from backend.services.prompts import PlantRequest

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-3-flash-preview"


class GeminiError(Exception):
    """Raised when the Gemini endpoint cannot produce an answer."""


def submit(request: PlantRequest, *, api_key: str, model: str = DEFAULT_MODEL) -> Optional[str]:
    """Send one request and return the raw answer text, or None on any failure."""
    try:
        return _call_gemini(request, api_key=api_key, model=model)
    except GeminiError as exc:
        logger.error("%s request failed: %s", request.intent.value, exc)
        return None


def build_payload(request: PlantRequest) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [part.to_payload() for part in request.parts]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": request.schema,
        },
    }


def _call_gemini(request: PlantRequest, *, api_key: str, model: str) -> str:
    if not api_key:
        raise GeminiError("Gemini API key is not configured")

    url = GEMINI_URL.format(model=model or DEFAULT_MODEL)
    headers = {"Content-Type": "application/json", "X-goog-api-key": api_key}

    try:
        response = requests.post(url, headers=headers, json=build_payload(request))
        response.raise_for_status()
        data = response.json()
    except requests.HTTPError as exc:
        body = ""
        try:
            body = exc.response.text
        except AttributeError:
            body = ""
        status = getattr(exc.response, "status_code", None)
        raise GeminiError(f"HTTP {status}: {body}") from exc
    except requests.RequestException as exc:
        raise GeminiError(f"Gemini request failed: {exc}") from exc
    except ValueError as exc:
        raise GeminiError("Gemini returned a non-JSON envelope") from exc

    text = _extract_text(data)
    if not text:
        raise GeminiError("Gemini returned an empty response")
    return text


def _extract_text(data: Any) -> str:
    if isinstance(data, dict):
        candidates = data.get("candidates")
        if isinstance(candidates, list):
            for candidate in candidates:
                if not isinstance(candidate, dict):
                    continue
                content = candidate.get("content")
                parts = content.get("parts") if isinstance(content, dict) else None
                if isinstance(parts, list):
                    for part in parts:
                        text = part.get("text") if isinstance(part, dict) else None
                        if isinstance(text, str) and text:
                            return text
    return ""
