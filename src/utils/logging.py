"""Shared structured logger for CycleCare."""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """Join a traceback into one ' | '-separated line, or None without one."""
    if exc_info is True:
        exc_info = sys.exc_info()
    if not exc_info or exc_info[0] is None:
        return None

    parts = (
        part.strip()
        for chunk in traceback.format_exception(*exc_info)
        for part in chunk.splitlines()
    )
    return " | ".join(part for part in parts if part)

class SingleLineLogger(Logger):
    """Logger whose exception records carry the traceback as a field."""

    def exception(self, msg, *args, exc_info=True, extra=None, **kwargs):
        extra = dict(extra or {}, exception=format_exception(exc_info))
        super().exception(msg, *args, exc_info=False, extra=extra, **kwargs)

logger = SingleLineLogger(
    service="cyclecare",
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_serializer=json.dumps,
    use_rfc3339=True
)
logger.append_keys(table=os.environ.get("CYCLECARE_TABLE_NAME"))
