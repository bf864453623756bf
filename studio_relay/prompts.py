from typing import Any, Dict, Optional

from .config import EndpointConfig
from .schemas import RelayRequest


class _Verbatim(dict):
    """Leave unknown placeholders in the template untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def branch_value(endpoint: EndpointConfig, fields: Dict[str, Any]) -> Optional[str]:
    if not endpoint.select:
        return None
    value = fields.get(endpoint.select)
    if value is None:
        return None
    return str(value)


def render(template: str, fields: Dict[str, Any]) -> str:
    values = _Verbatim({k: "" if v is None else v for k, v in fields.items()})
    return template.format_map(values)


def build_prompt(endpoint: EndpointConfig, request: RelayRequest) -> str:
    """Pick the endpoint's template for this request and fill in its fields.

    Field values are inserted as-is; the model sees exactly what the caller sent.
    """
    fields = request.prompt_fields()
    template = endpoint.choose(branch_value(endpoint, fields))
    return render(template, fields)


__all__ = ["branch_value", "render", "build_prompt"]
