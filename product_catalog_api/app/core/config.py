"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; in that case every write
request is rejected because no API token is accepted.  ``run.py``
loads a ``.env`` file before this module is imported, so values placed
there behave exactly like real environment variables.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma‑separated list of bearer tokens allowed to create, update or
    # delete products.  Example: API_TOKENS="token1,token2".  Reads are
    # public and never consult this value.
    api_tokens: str = os.getenv("API_TOKENS", "")

    def token_list(self) -> List[str]:
        """Return the configured API tokens with blanks removed."""
        return [t.strip() for t in self.api_tokens.split(",") if t.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
