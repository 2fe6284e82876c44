"""Write raw completion responses to timestamped JSON files for inspection."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Optional


logger = logging.getLogger("ResponseStore")


class ResponseStore:
    """Dump one response object per file under a data directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def save(self, payload: Any, filename: Optional[str] = None) -> Path:
        """Write payload as indented JSON and return the file path."""
        self.directory.mkdir(parents = True, exist_ok = True)
        path = self.directory / (filename or default_filename())

        with path.open("w", encoding = "utf-8") as file:
            json.dump(payload, file, indent = 2, ensure_ascii = False, default = str)

        logger.info(f"Response saved to: {path}")
        return path


def default_filename() -> str:
    """Return response_<epoch-millis>.json."""
    return f"response_{int(time.time() * 1000)}.json"
