"""Runtime configuration read from the environment."""

import os

# Inputs longer than this suppress live previews
PREVIEW_LIMIT = int(os.environ.get("PTOOLS_PREVIEW_LIMIT", "30000"))

LOG_LEVEL = os.environ.get("PTOOLS_LOG_LEVEL", "INFO").upper()

# Timeout for transforms that make HTTP requests (seconds)
HTTP_TIMEOUT = float(os.environ.get("PTOOLS_HTTP_TIMEOUT", "30"))

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
