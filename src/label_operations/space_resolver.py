"""Space key resolution with a fallback chain.

Order: caller hint, then the first space the API lists, then the configured
fallback key. Resolution never raises; falling back is reported on the
returned SpaceResolution and logged as a warning.
"""

import logging
from typing import TYPE_CHECKING, Optional

from src.label_operations.models import ResolutionSource, SpaceResolution

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_SPACE_KEY = "DEV"


class SpaceResolver:
    """Determines which space an operation targets.

    When several spaces exist and no hint is given, the first one in API
    order wins. That order is not guaranteed, so the pick can differ between
    accounts.

    Example:
        >>> resolver = SpaceResolver(api, fallback_space_key="DEV")
        >>> resolver.resolve("TEAM").space_key
        'TEAM'
    """

    def __init__(self, api: "APIWrapper", fallback_space_key: str = DEFAULT_FALLBACK_SPACE_KEY):
        if not fallback_space_key or not fallback_space_key.strip():
            raise ValueError("fallback_space_key cannot be empty")
        self.api = api
        self.fallback_space_key = fallback_space_key.strip()

    def resolve(self, context_hint: Optional[str] = None) -> SpaceResolution:
        """Resolve the space key for one top-level operation.

        Args:
            context_hint: Space key supplied by the caller, if any

        Returns:
            SpaceResolution with a non-empty key
        """
        if context_hint and str(context_hint).strip():
            space_key = str(context_hint).strip()
            logger.debug(f"Using space key from context: {space_key}")
            return SpaceResolution(space_key, ResolutionSource.CONTEXT)

        logger.debug("No space key in context, fetching spaces list...")
        try:
            spaces = self.api.list_spaces(limit=1)
        except Exception as e:
            return self._fallback(f"space lookup failed: {e}")

        for space in spaces:
            space_key = space.get("key")
            if space_key:
                logger.info(f"Using first listed space: {space_key}")
                return SpaceResolution(space_key, ResolutionSource.API)

        return self._fallback("no spaces found")

    def resolve_space_key(self, context_hint: Optional[str] = None) -> str:
        """Resolve and return only the space key."""
        return self.resolve(context_hint).space_key

    def _fallback(self, reason: str) -> SpaceResolution:
        logger.warning(
            f"Using fallback space key '{self.fallback_space_key}' ({reason})"
        )
        return SpaceResolution(self.fallback_space_key, ResolutionSource.FALLBACK, reason)
