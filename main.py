from __future__ import annotations

import logging
import os
import sys
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# `uvicorn main:app` serves the HTTP API; running this file asks the advisor one question.
from interface.api import app
from interface.cli import main as cli_main

if __name__ == "__main__":
    cli_main(sys.argv[1:])
