from datetime import datetime
from zoneinfo import ZoneInfo

from app.config import settings


def local_datetime() -> datetime:
    """Timezone-aware "now" in the configured shop timezone."""
    return datetime.now(ZoneInfo(settings.LOCAL_TIMEZONE))
