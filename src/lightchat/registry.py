"""In-memory light registry.

Authoritative state for all fixtures in one process. Fixtures are seeded
once at construction, toggled in place, never deleted and never persisted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lightchat.exceptions import DuplicateFixtureError
from lightchat.models.fixture import Fixture, seed_fixtures

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class LightRegistry:
    """Owns the state of a set of light fixtures.

    Reads return snapshots, so the only way to change a fixture is
    :meth:`set_fixture_state`.

    Usage::

        registry = LightRegistry()
        registry.set_fixture_state(2, True)
        [f.is_on for f in registry.list_fixtures()]  # [False, True, True]
    """

    def __init__(self, fixtures: Iterable[Fixture] | None = None) -> None:
        """Initialize the registry.

        Args:
            fixtures: Initial fixtures, in display order. Defaults to the
                three seeded lights.

        Raises:
            DuplicateFixtureError: If two fixtures share an id.
        """
        self._fixtures: dict[int, Fixture] = {}
        for fixture in seed_fixtures() if fixtures is None else fixtures:
            if fixture.id in self._fixtures:
                raise DuplicateFixtureError(fixture.id)
            self._fixtures[fixture.id] = fixture.model_copy()

    def list_fixtures(self) -> list[Fixture]:
        """Return the current state of every fixture in insertion order."""
        return [f.model_copy() for f in self._fixtures.values()]

    def get_fixture(self, fixture_id: int) -> Fixture | None:
        """Return a snapshot of one fixture, or None if the id is unknown."""
        fixture = self._fixtures.get(fixture_id)
        return fixture.model_copy() if fixture is not None else None

    def set_fixture_state(self, fixture_id: int, is_on: bool) -> Fixture | None:
        """Switch a fixture on or off.

        Args:
            fixture_id: Id of the fixture to change.
            is_on: New state.

        Returns:
            The updated fixture, or None if no fixture has that id. An
            unknown id leaves every fixture untouched.
        """
        fixture = self._fixtures.get(fixture_id)
        if fixture is None:
            logger.debug("No fixture with id %s", fixture_id)
            return None
        fixture.is_on = is_on
        logger.debug("Fixture %s (%s) is_on=%s", fixture.id, fixture.name, is_on)
        return fixture.model_copy()

    def __len__(self) -> int:
        return len(self._fixtures)

    def __contains__(self, fixture_id: object) -> bool:
        return fixture_id in self._fixtures

    def __repr__(self) -> str:
        return f"LightRegistry(fixtures={len(self._fixtures)})"
