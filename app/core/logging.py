"""Shared logger for the species catalog.

Records go to the `uvicorn.error` logger so species edits and database
failures show up in the server output next to the request log.
"""

import logging

logger = logging.getLogger("uvicorn.error")
