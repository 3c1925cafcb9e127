#!/usr/bin/env python3
"""Run script for usermanager."""

import logging
import os

import uvicorn


def main() -> None:
    log_level = os.getenv("LOG_LEVEL", "info").lower()
    logging.basicConfig(level=log_level.upper())
    uvicorn.run(
        "usermanager.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "False").lower() == "true",
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
