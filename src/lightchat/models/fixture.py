"""Fixture model for the mock lights plugin."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Fixture(BaseModel):
    """A mock controllable light.

    Serialized for the model as ``{"id": ..., "name": ..., "is_on": ...}``.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
    name: str
    is_on: Optional[bool] = None


SEED_FIXTURES: tuple[tuple[int, str, bool], ...] = (
    (1, "Table Lamp", False),
    (2, "Porch light", False),
    (3, "Chandelier", True),
)


def seed_fixtures() -> list[Fixture]:
    """Build fresh copies of the three seeded fixtures."""
    return [Fixture(id=i, name=name, is_on=on) for i, name, on in SEED_FIXTURES]
