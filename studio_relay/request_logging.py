from flask import request


def _describe_body(payload) -> dict:
    if not isinstance(payload, dict):
        return {"fields": None, "media_bytes": 0}
    media = payload.get("media")
    return {
        "fields": sorted(payload.keys()),
        "media_bytes": len(media) if isinstance(media, str) else 0,
    }


def register_request_logging(app):
    @app.before_request
    def _log_in():
        if request.method != "POST":
            app.logger.info("IN %s %s", request.method, request.path)
            return
        try:
            desc = _describe_body(request.get_json(silent=True))
            app.logger.info(
                "IN %s %s fields=%s media_bytes=%s",
                request.method,
                request.path,
                desc["fields"],
                desc["media_bytes"],
            )
        except Exception:
            app.logger.info("IN %s %s (no json)", request.method, request.path)

    @app.after_request
    def _log_out(resp):
        app.logger.info("OUT %s %s %s", request.method, request.path, resp.status_code)
        return resp


__all__ = ["register_request_logging"]
