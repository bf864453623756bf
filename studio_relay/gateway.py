from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from .config import DEFAULT_API_BASE, Settings

Contents = List[Dict[str, Any]]

# Finish reasons that make the candidate text unusable even when parts are present.
BAD_FINISH_REASONS = ("SAFETY", "RECITATION", "LANGUAGE")


class GatewayError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GeminiClient:
    """Minimal client for the Gemini ``generateContent`` REST call."""

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str = DEFAULT_API_BASE,
        timeout: Tuple[float, float] = (10, 300),
    ):
        if not api_key:
            raise RuntimeError("Gemini API key not configured. Set the API_KEY env var.")
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            settings.api_key or "",
            api_base=settings.api_base,
            timeout=(settings.connect_timeout, settings.read_timeout),
        )

    def generate_content(self, model: str, contents: Contents, system_instruction: str) -> Dict[str, Any]:
        url = f"{self.api_base}/models/{model}:generateContent"
        body = {
            "contents": contents,
            "systemInstruction": {"parts": [{"text": system_instruction}]},
        }
        try:
            r = requests.post(
                url,
                json=body,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,  # (connect, read)
            )
        except requests.RequestException as exc:
            raise GatewayError(f"Gemini request failed: {exc}") from exc

        if r.status_code >= 400:
            raise GatewayError(_error_message(r), status_code=r.status_code)

        try:
            payload = r.json()
        except ValueError as exc:
            raise GatewayError("Gemini returned a non-JSON response", status_code=r.status_code) from exc
        if not isinstance(payload, dict):
            raise GatewayError("Gemini returned an unexpected response", status_code=r.status_code)
        return payload


def _error_message(r: requests.Response) -> str:
    try:
        payload = r.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
    text = (r.text or "").strip()
    return text or f"Gemini request failed with status {r.status_code}"


def extract_text(envelope: Dict[str, Any]) -> str:
    candidates = envelope.get("candidates") or []
    if not candidates:
        feedback = envelope.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        if reason:
            raise GatewayError(f"Prompt was blocked: {reason}")
        raise GatewayError("Gemini returned no candidates")

    first = candidates[0] or {}
    reason = first.get("finishReason")
    if reason in BAD_FINISH_REASONS:
        raise GatewayError(f"Candidate was stopped (finishReason={reason})")

    parts = (first.get("content") or {}).get("parts") or []
    return "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))


def shape_contents(user_content: Union[str, Contents], is_media: bool = False) -> Contents:
    if is_media:
        return user_content  # type: ignore[return-value]
    return [{"role": "user", "parts": [{"text": user_content}]}]


def invoke(
    client: GeminiClient,
    model_name: str,
    system_prompt: str,
    user_content: Union[str, Contents],
    is_media: bool = False,
) -> str:
    contents = shape_contents(user_content, is_media)
    envelope = client.generate_content(model_name, contents, system_prompt)
    return extract_text(envelope)


__all__ = [
    "Contents",
    "BAD_FINISH_REASONS",
    "GatewayError",
    "GeminiClient",
    "extract_text",
    "shape_contents",
    "invoke",
]
