"""
Server entrypoint for the screenshot-to-code HTTP API.

Responsibilities:
- Configure process-wide logging from `LOG_LEVEL`.
- Run `api.http_api:app` with uvicorn.
"""

import logging

import uvicorn

from screenshot_to_code.llm.provider_config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    uvicorn.run(
        "screenshot_to_code.api.http_api:app",
        host=host,
        port=port,
        reload=reload,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    configure_logging()
    run_server()
