from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlparse, urlunparse

ALLOWED_SCHEMES = frozenset({"http", "https"})


class LinkResolutionError(ValueError):
    """Raised when an ``href`` cannot be resolved into an absolute URL."""


def normalize_root_url(value: str) -> Optional[str]:
    """Validates a user-supplied root URL and returns its canonical form.

    Only absolute http/https URLs with a hostname are accepted. An empty path
    becomes ``/`` and the fragment is dropped.
    """

    candidate = value.strip()
    if not candidate:
        return None
    try:
        parsed = urlparse(candidate)
        parsed.port  # raises ValueError for out-of-range ports
    except ValueError:
        return None

    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.hostname:
        return None
    if any(character.isspace() for character in candidate):
        return None

    path = parsed.path or "/"
    return urlunparse(
        parsed._replace(scheme=parsed.scheme.lower(), path=path, fragment="")
    )


@dataclass(slots=True)
class TargetFilter:
    """Encapsulates the origin-domain restriction of a crawl."""

    target_hostname: str

    @classmethod
    def for_root(cls, root_url: str) -> "TargetFilter":
        return cls(target_hostname=(urlparse(root_url).hostname or "").lower())

    def is_allowed(self, url: str) -> bool:
        try:
            parsed = urlparse(url)
            hostname = (parsed.hostname or "").lower()
        except ValueError:
            return False

        if parsed.scheme.lower() not in ALLOWED_SCHEMES:
            return False
        return bool(hostname) and hostname == self.target_hostname

    def normalize_link(self, base_url: str, href: Optional[str]) -> Optional[str]:
        """Resolves ``href`` against ``base_url``.

        Returns ``None`` for missing hrefs and off-domain targets; raises
        :class:`LinkResolutionError` when the value cannot be parsed.
        """

        if not href or not href.strip():
            return None

        try:
            joined = urljoin(base_url, href.strip())
            parsed = urlparse(joined)
            parsed.port
        except ValueError as exc:
            raise LinkResolutionError(f"Malformed href {href!r}: {exc}") from exc

        if not self.is_allowed(joined):
            return None

        # SPA routes live in the fragment ("#/about"); other fragments are anchors.
        keep_fragment = parsed.fragment.startswith("/")
        sanitized = parsed._replace(path=parsed.path or "/")
        if not keep_fragment:
            sanitized = sanitized._replace(fragment="")
        return urlunparse(sanitized)
