import logging

from UI.app import app, server
from UI.config import settings

# Callback modules register themselves on import
from UI.callback import dashboard_callbacks, entity_callbacks, routing_callbacks, table_callbacks

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if __name__ == '__main__':
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
