from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_or(value: Any, default: Optional[str]) -> Any:
    """Map null to the field default and other JSON scalars to their string form."""
    if value is None:
        return default
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


class RelayRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def prompt_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=False)


class MediaProcessRequest(RelayRequest):
    media: str = Field(..., min_length=1, description="Base64 encoded media payload")
    mime_type: str = Field(..., alias="mimeType", min_length=1)
    task: Optional[str] = None

    @field_validator("task", mode="before")
    @classmethod
    def _task(cls, value):
        return _scalar_or(value, None)

    def prompt_fields(self) -> Dict[str, Any]:
        # keep the payload out of template formatting
        return {"mime_type": self.mime_type, "task": self.task}

    def contents(self, user_text: Optional[str]) -> List[Dict[str, Any]]:
        parts: List[Dict[str, Any]] = [
            {"inlineData": {"data": self.media, "mimeType": self.mime_type}},
        ]
        if user_text:
            parts.append({"text": user_text})
        return [{"role": "user", "parts": parts}]


class TranslateRequest(RelayRequest):
    text: str
    target_lang: str = Field(..., alias="targetLang", min_length=1)
    type: str = "text"

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return _scalar_or(value, "text")


class CreateRequest(RelayRequest):
    topic: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    lang: str = "English"

    @field_validator("lang", mode="before")
    @classmethod
    def _lang(cls, value):
        return _scalar_or(value, "English")


class SubGenRequest(RelayRequest):
    text: str


__all__ = [
    "RelayRequest",
    "MediaProcessRequest",
    "TranslateRequest",
    "CreateRequest",
    "SubGenRequest",
]
