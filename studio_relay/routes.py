from typing import Any, Dict, Type

from flask import Blueprint, Response, current_app, jsonify, request

from .config import HEALTH_MESSAGE, RelayConfig
from .errors import BadRequestBody, error_response
from .gateway import GeminiClient, invoke
from .prompts import branch_value, build_prompt
from .schemas import (
    CreateRequest,
    MediaProcessRequest,
    RelayRequest,
    SubGenRequest,
    TranslateRequest,
)


routes = Blueprint("studio_relay", __name__)

ENDPOINT_SCHEMAS: Dict[str, Type[RelayRequest]] = {
    "media-process": MediaProcessRequest,
    "translate": TranslateRequest,
    "create": CreateRequest,
    "sub-gen": SubGenRequest,
}


def _logger():
    return current_app.logger


def _client() -> GeminiClient:
    return current_app.extensions["gemini_client"]


def _relay_config() -> RelayConfig:
    return current_app.extensions["relay_config"]


def _parse(schema: Type[RelayRequest]) -> RelayRequest:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise BadRequestBody("body must be a JSON object")
    return schema.model_validate(body)


def _relay(endpoint_name: str, payload: RelayRequest, user_content: Any, is_media: bool = False):
    config = _relay_config()
    endpoint = config.endpoint(endpoint_name)
    model = config.model_for(endpoint_name)
    try:
        prompt = build_prompt(endpoint, payload)
        _logger().info(
            "RELAY endpoint=%s model=%s branch=%s",
            endpoint_name,
            model,
            branch_value(endpoint, payload.prompt_fields()),
        )
        result = invoke(_client(), model, prompt, user_content, is_media)
    except Exception as exc:
        _logger().exception("%s failed", endpoint_name)
        return error_response(str(exc) or exc.__class__.__name__, 500)
    return jsonify({"result": result})


@routes.route("/", methods=["GET"])
def health():
    return Response(HEALTH_MESSAGE, status=200, mimetype="text/plain")


@routes.route("/healthz", methods=["GET"])
def healthz():
    return {
        "ok": True,
        "target": _client().api_base,
        "endpoints": sorted(_relay_config().endpoints.keys()),
    }


@routes.route("/api/media-process", methods=["POST"])
def media_process():
    payload: MediaProcessRequest = _parse(MediaProcessRequest)
    endpoint = _relay_config().endpoint("media-process")
    return _relay("media-process", payload, payload.contents(endpoint.user_text), is_media=True)


@routes.route("/api/translate", methods=["POST"])
def translate():
    payload: TranslateRequest = _parse(TranslateRequest)
    return _relay("translate", payload, payload.text)


@routes.route("/api/create", methods=["POST"])
def create():
    payload: CreateRequest = _parse(CreateRequest)
    return _relay("create", payload, payload.topic)


@routes.route("/api/sub-gen", methods=["POST"])
def sub_gen():
    payload: SubGenRequest = _parse(SubGenRequest)
    return _relay("sub-gen", payload, payload.text)


__all__ = ["ENDPOINT_SCHEMAS", "routes"]
