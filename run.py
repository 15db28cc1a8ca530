#!/usr/bin/env python3
"""Run the scenario API."""

import uvicorn

from settings import API_HOST, API_PORT
from settings.logging import setup_logging

if __name__ == "__main__":
    setup_logging(level="INFO", to_file=True, intercept_std=True)
    uvicorn.run("web.http.app:create_app", factory=True, host=API_HOST, port=API_PORT, log_config=None)
