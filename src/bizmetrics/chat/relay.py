from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from bizmetrics.chat.client import PerplexityClient
from bizmetrics.config.env import get_relay_config
from bizmetrics.errors import ChatUpstreamError

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Upstream status -> message returned to the caller; anything else is a 500
UPSTREAM_ERRORS = {
    401: "Authentication failed",
    429: "Rate limit exceeded",
}


def _get_client():
    # Tests inject a fake through app.config
    client = app.config.get("CHAT_CLIENT")
    if client is None:
        client = PerplexityClient()
    return client


@app.post("/api/chat")
def post_chat():
    payload = request.get_json(force=True, silent=True)
    message = payload.get("message") if isinstance(payload, dict) else None
    if not message or not isinstance(message, str):
        logger.warning("Rejected chat request: message type %s", type(message).__name__)
        return jsonify({"message": "Invalid request format"}), 400

    try:
        reply = _get_client().ask(message)
    except ChatUpstreamError as exc:
        logger.error("Chat upstream error (status %s): %s", exc.status, exc)
        if exc.status in UPSTREAM_ERRORS:
            return jsonify({"message": UPSTREAM_ERRORS[exc.status]}), exc.status
        return jsonify({"message": f"Error processing request: {exc}"}), 500
    except Exception as exc:
        logger.exception("Unexpected chat relay failure")
        return jsonify({"message": f"Error processing request: {exc}"}), 500

    return jsonify(reply.to_dict())


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    cfg = get_relay_config()
    app.run(host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()
