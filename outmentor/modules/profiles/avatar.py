import hashlib
from typing import Optional

from outmentor.config import settings


def gravatar_url(email: Optional[str], size: Optional[int] = None, default: Optional[str] = None) -> str:
    """Gravatar image URL for an e-mail (trimmed, lower-cased, MD5-hashed)."""
    normalized = (email or "").strip().lower()
    digest = hashlib.md5(normalized.encode("utf-8")).hexdigest()
    size = size or settings.gravatar_size
    default = default or settings.gravatar_default
    return f"https://www.gravatar.com/avatar/{digest}?s={size}&d={default}"
