"""Raw channel payloads, as delivered by the device APIs.

These models only coerce and rename; they keep the API's units
(degrees, m/s²).  Conversion to radians and domain types happens in
:mod:`hellcompass.ingestion`.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from hellcompass.ingestion.normalize import safe_float


class _ReadingModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)


class PositionReading(_ReadingModel):
    """A position update.

    Accepts both flat payloads and the browser shape where the values
    sit under ``coords``.
    """

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat", "latitude_deg"))
    longitude: float | None = Field(
        default=None,
        validation_alias=AliasChoices("longitude", "lng", "lon", "longitude_deg"),
    )
    heading: float | None = Field(default=None, validation_alias=AliasChoices("heading", "heading_deg", "course"))

    @model_validator(mode="before")
    @classmethod
    def _merge_coords(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        nested = values.get("coords")
        merged = dict(values)
        if isinstance(nested, dict):
            merged.update(nested)
        merged.setdefault("raw", values)
        return merged

    @field_validator("latitude", "longitude", "heading", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def is_complete(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class OrientationReading(_ReadingModel):
    """A device orientation event."""

    alpha: float | None = Field(default=None, validation_alias=AliasChoices("alpha", "alpha_deg"))
    beta: float | None = Field(default=None, validation_alias=AliasChoices("beta", "beta_deg"))
    gamma: float | None = Field(default=None, validation_alias=AliasChoices("gamma", "gamma_deg"))
    compass_heading: float | None = Field(
        default=None,
        validation_alias=AliasChoices("webkitCompassHeading", "compassHeading", "compass_heading", "compassHeading_deg"),
    )

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged

    @field_validator("alpha", "beta", "gamma", "compass_heading", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class Vector3(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    x: float
    y: float
    z: float

    @field_validator("x", "y", "z", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float:
        parsed = safe_float(value)
        if parsed is None:
            raise ValueError("vector component missing")
        return parsed

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, values: Any) -> Any:
        if isinstance(values, (list, tuple)) and len(values) == 3:
            return {"x": values[0], "y": values[1], "z": values[2]}
        return values

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    @property
    def norm(self) -> float:
        return float((self.x**2 + self.y**2 + self.z**2) ** 0.5)


class MotionReading(_ReadingModel):
    """A device motion event.

    Either vector may be missing or incomplete on a given device; an
    incomplete vector is treated as absent.
    """

    acceleration: Vector3 | None = Field(
        default=None,
        validation_alias=AliasChoices("acceleration", "accel", "accel_xyz"),
    )
    acceleration_including_gravity: Vector3 | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "accelerationIncludingGravity",
            "acceleration_including_gravity",
            "accelIncludingGravity",
            "accelIncludingGravity_xyz",
        ),
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_incomplete_vectors(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {"raw": values}
        for key, value in values.items():
            if key == "raw":
                continue
            if isinstance(value, dict) and any(safe_float(value.get(axis)) is None for axis in ("x", "y", "z")):
                continue
            if isinstance(value, (list, tuple)) and (len(value) != 3 or any(safe_float(v) is None for v in value)):
                continue
            cleaned[key] = value
        return cleaned
