"""
Loader settings for the acceleration / delta-v calculator.

Settings are read from environment variables, with a local .env file
loaded first:
- ACCDV_DATA_URL: Base URL serving versions/<version>/<template>.json
- ACCDV_DATA_DIR: Local directory with the same layout (wins over the URL)
- ACCDV_HTTP_TIMEOUT: HTTP timeout in seconds
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_DATA_URL = "http://localhost:5173"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass
class LoaderConfig:
    """Where and how catalog tables are fetched."""
    base_url: str = DEFAULT_DATA_URL
    data_dir: Optional[Path] = None
    timeout: float = DEFAULT_HTTP_TIMEOUT

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.data_dir is not None:
            self.data_dir = Path(self.data_dir)
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0.")

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """
        Build settings from the environment.

        Raises:
            ValueError: If ACCDV_HTTP_TIMEOUT is not a number.
        """
        data_dir = os.getenv("ACCDV_DATA_DIR")
        timeout = os.getenv("ACCDV_HTTP_TIMEOUT")
        try:
            timeout_s = float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT
        except ValueError:
            raise ValueError(f"ACCDV_HTTP_TIMEOUT must be numeric, got {timeout!r}") from None
        return cls(
            base_url=os.getenv("ACCDV_DATA_URL") or DEFAULT_DATA_URL,
            data_dir=Path(data_dir) if data_dir else None,
            timeout=timeout_s,
        )
