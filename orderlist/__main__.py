"""Run the list service with uvicorn: ``python -m orderlist``."""

from __future__ import annotations

import uvicorn

from orderlist.config import load_config
from orderlist.logging_setup import configure_logging
from orderlist.main import create_app


def main() -> None:
    configure_logging()
    cfg = load_config()
    uvicorn.run(create_app(cfg), host=cfg.api.host, port=cfg.api.port, log_config=None)


if __name__ == "__main__":
    main()
