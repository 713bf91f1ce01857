"""lightchat exception hierarchy.

All lightchat-specific exceptions inherit from LightChatError.
"""


class LightChatError(Exception):
    """Base exception for all lightchat errors."""


class ConfigError(LightChatError):
    """Raised when required configuration is missing or invalid.

    Configuration errors are fatal: the console loop is never entered.
    """


class DuplicateFixtureError(LightChatError):
    """Raised when a registry is seeded with two fixtures sharing an id."""

    def __init__(self, fixture_id: int) -> None:
        self.fixture_id = fixture_id
        super().__init__(f"Duplicate fixture id: {fixture_id}")


class SessionError(LightChatError):
    """Raised when a chat session is used incorrectly."""
