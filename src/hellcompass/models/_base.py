"""Base model for hellcompass value types.

Every model is frozen: once a reading, fix or frame result has been
built it is never mutated, only replaced.  Angle fields are wrapped
into ``[0, 2π)`` by the :data:`WrappedAngle` annotated type.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict

from hellcompass.angles import wrap_angle


def _wrap(value: Any) -> float:
    return wrap_angle(value)


WrappedAngle = Annotated[float, AfterValidator(_wrap)]
"""Annotated float (radians) normalized into ``[0, 2π)`` on validation."""


class CompassBaseModel(BaseModel):
    """Base for immutable hellcompass models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
