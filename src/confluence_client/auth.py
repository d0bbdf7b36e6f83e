"""Credential loading for the label organizer.

Values come from the process environment; a `.env` file in the working
directory is merged in by python-dotenv without overriding variables that
are already set.
"""

import logging
import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

logger = logging.getLogger(__name__)

URL_VAR = 'CONFLUENCE_URL'
USER_VAR = 'CONFLUENCE_USER'
TOKEN_VAR = 'CONFLUENCE_API_TOKEN'


class Credentials(NamedTuple):
    """Site URL and basic-auth pair for Confluence Cloud."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Reads the organizer's Confluence credentials.

    `CONFLUENCE_URL` is the site's wiki base (for example
    https://example.atlassian.net/wiki), `CONFLUENCE_USER` the account
    e-mail and `CONFLUENCE_API_TOKEN` an API token of that account.
    Nothing is cached, so a rotated token is picked up by the next client.
    """

    def __init__(self):
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Return the credentials, or raise InvalidCredentialsError.

        The URL must be http(s); a trailing slash is dropped so REST paths
        can be appended to it.
        """
        values = {name: (os.getenv(name) or '').strip() for name in (URL_VAR, USER_VAR, TOKEN_VAR)}
        missing = [name for name, value in values.items() if not value]
        url = values[URL_VAR].rstrip('/')
        user = values[USER_VAR]

        if missing:
            logger.debug(f"Missing credential variables: {', '.join(missing)}")
        elif not url.startswith(('https://', 'http://')):
            logger.debug(f"{URL_VAR} is not an http(s) URL")
            missing = [URL_VAR]

        if missing:
            raise InvalidCredentialsError(
                user=user or "unknown",
                endpoint=url or "unknown",
            )

        return Credentials(url=url, user=user, api_token=values[TOKEN_VAR])
