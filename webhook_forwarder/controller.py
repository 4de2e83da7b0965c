import json
import logging

from flask import Blueprint, Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from .constants import RECIPIENT_NAME, WEBHOOK_BASE_PATH
from .detection import GRAFANA, detect_dialect
from .errors import DeliveryError, ForwarderError, InternalError, MalformedPayloadError
from .normalizer import normalize
from .plugin import WebhookForwarderPlugin
from .services import build_sink_from_env, deliver

logger = logging.getLogger(__name__)

_FROM_ENV = object()

SUCCESS_MESSAGES = {
    GRAFANA: "Grafana alert forwarded successfully",
}
FAILURE_MESSAGES = {
    GRAFANA: "Failed to forward Grafana alert",
}


def _reject_constant(name):
    # NaN/Infinity não são JSON válido
    raise ValueError(f"invalid JSON constant: {name}")


def decode_payload():
    content_type = request.headers.get("Content-Type", "")
    if content_type and content_type != "application/json":
        raise MalformedPayloadError("Content-Type must be application/json")

    try:
        raw = json.loads(request.get_data(), parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedPayloadError(details=str(exc))

    if raw is None:
        raise MalformedPayloadError("Empty request body")
    if not isinstance(raw, dict):
        raise MalformedPayloadError(details=f"expected a JSON object, got {type(raw).__name__}")
    return raw


def register_error_handlers(app: Flask):
    # Fronteira única: nenhuma exceção sai daqui sem virar JSON
    @app.errorhandler(ForwarderError)
    def handle_forwarder_error(exc):
        logger.info(f"Requisição rejeitada ({exc.status_code}): {exc.message}")
        if isinstance(exc, DeliveryError):
            logger.warning(f"Entrega falhou: {exc.outcome}")
        return jsonify(exc.to_response()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        logger.exception("Erro inesperado ao processar webhook")
        err = InternalError()
        return jsonify(err.to_response()), err.status_code


def create_app(sink=_FROM_ENV, recipient=None, base_path=None):
    app = Flask(__name__)
    if sink is _FROM_ENV:
        sink = build_sink_from_env()

    plugin = WebhookForwarderPlugin(recipient or RECIPIENT_NAME)
    plugin.set_message_handler(sink)
    plugin.enable()
    app.extensions["webhook_forwarder"] = plugin

    prefix = WEBHOOK_BASE_PATH if base_path is None else base_path.rstrip("/")
    bp = Blueprint("webhook", __name__, url_prefix=prefix or None)

    @app.route('/health', methods=['GET'])
    def health():
        return {
            'status': 'ok',
            'service': 'webhook-forwarder',
            'enabled': plugin.enabled,
            'sink_configured': plugin.msg_handler is not None,
        }, 200

    @bp.route('/message', methods=['POST'])
    def message():
        raw = decode_payload()
        dialect = detect_dialect(raw)
        notification = normalize(raw)
        logger.debug(f"Notificação normalizada ({dialect}): {notification}")

        outcome = deliver(
            notification,
            plugin.msg_handler,
            failure_message=FAILURE_MESSAGES.get(dialect, "Failed to forward message"),
        )
        logger.info(f"Webhook {dialect} encaminhado para '{plugin.user_name}' (priority={notification.priority}, {outcome})")

        body = {
            "success": True,
            "message": SUCCESS_MESSAGES.get(dialect, "Message forwarded successfully"),
        }
        if dialect == GRAFANA:
            body["type"] = GRAFANA
        return jsonify(body), 200

    @bp.route('/', methods=['GET'])
    def info():
        return jsonify(plugin.info_document(request.path, request.host)), 200

    @bp.route('/display', methods=['GET'])
    def display():
        return Response(plugin.get_display(request.url), mimetype="text/markdown")

    app.register_blueprint(bp)
    register_error_handlers(app)
    return app
