from typing import Callable, Optional

from catalog.core.config import settings

# (entity, attachment_name) -> url | None
AttachmentUrlResolver = Callable[[object, str], Optional[str]]


def media_url_resolver(base_url: str = settings.MEDIA_BASE_URL) -> AttachmentUrlResolver:
    """
    Resolve attachments stored under ``<name>_key`` columns (``cover_key``,
    ``logo_key``...) to URLs below base_url. Missing attachments give None.
    """
    base = base_url.rstrip("/")

    def resolve(entity: object, attachment_name: str) -> Optional[str]:
        key = getattr(entity, f"{attachment_name}_key", None)
        if not key:
            return None
        return f"{base}/{key.lstrip('/')}"

    return resolve


def get_attachment_resolver() -> AttachmentUrlResolver:
    """Dependency for routers; override in tests to point elsewhere."""
    return media_url_resolver()
