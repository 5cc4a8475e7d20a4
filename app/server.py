"""
API server entry point.

    python app/server.py
    uvicorn app.server:app
"""

import uvicorn

from src.api import create_api_app
from src.audit import configure_logging
from src.config import get_settings


configure_logging(get_settings().app.log_level)

app = create_api_app()


if __name__ == "__main__":
    app_settings = get_settings().app
    uvicorn.run(app, host=app_settings.api_host, port=app_settings.api_port)
