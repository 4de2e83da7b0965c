import logging

from webhook_forwarder.constants import APP_PORT, DEBUG_MODE, LOG_LEVEL
from webhook_forwarder.controller import create_app

logging.basicConfig(
    level=logging.DEBUG if DEBUG_MODE else getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE)
