"""Textual conversion of relative resource references into absolute URLs"""

from typing import Optional
from urllib.parse import urlparse

from sharecard.core.models import Origin


def origin_from_url(url: str) -> Origin:
    """Build the origin (scheme + host[:port]) of an absolute URL"""
    parsed = urlparse(url)
    host = parsed.netloc.rsplit("@", 1)[-1].lower()
    return Origin(scheme=parsed.scheme.lower(), host=host)


def absolutize(raw_ref: Optional[str], origin: Origin) -> Optional[str]:
    """
    Join a reference onto an origin.

    ``/img/x.png`` and ``img/x.png`` both become ``scheme://host/img/x.png``;
    anything starting with ``http`` (any case) is returned as is. Dot segments, queries
    and percent-encoding are left untouched.
    """
    if raw_ref is None or raw_ref == "":
        return raw_ref
    if raw_ref.startswith("/"):
        return f"{origin}{raw_ref}"
    if raw_ref.lower().startswith("http"):
        return raw_ref
    return f"{origin}/{raw_ref}"
