import json
from datetime import datetime, timezone

from .config import SERVICE_NAME


def log(level: str, message: str, **data):
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "service": SERVICE_NAME,
        "message": message,
    }
    if data:
        entry["data"] = data
    print(json.dumps(entry, default=str, separators=(",", ":")))
