"""
Address Map Component Model.

Declares the data binding the map needs from its host: exactly one
dimension (the address text) and one measure (the encoded value) under a
single binding path.

Example YAML:
    - tag: store-locations
      component_type: address_map
      dimension: address
      measure: revenue
      selection_enabled: true
"""

from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from addressmap.configs.settings_models import DEFAULT_GEOMETRY_URL


class AddressMapComponent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: str | None = Field(default=None, description="User-friendly identifier")
    index: str | None = Field(default=None, description="Internal UUID (auto-generated)")
    component_type: Literal["address_map"] = "address_map"
    title: str = Field(default="", description="Component title")

    binding_path: str = Field(default="/qHyperCubeDef")
    dimensions: list[str] = Field(..., description="Address text column")
    measures: list[str] = Field(..., description="Numeric value column")

    geometry_url: str = Field(default=DEFAULT_GEOMETRY_URL)
    selection_enabled: bool = Field(default=True)

    @model_validator(mode="before")
    @classmethod
    def accept_single_columns(cls, data):
        """Allow ``dimension: x`` / ``measure: y`` shorthand."""
        if isinstance(data, dict):
            data = dict(data)
            if "dimension" in data:
                data.setdefault("dimensions", [data.pop("dimension")])
            if "measure" in data:
                data.setdefault("measures", [data.pop("measure")])
        return data

    @field_validator("dimensions", "measures")
    @classmethod
    def validate_exactly_one(cls, v: list[str], info) -> list[str]:
        if len(v) != 1:
            raise ValueError(f"Exactly one entry required in {info.field_name}, got {len(v)}")
        if not v[0].strip():
            raise ValueError(f"{info.field_name} entry must be non-empty")
        return v

    @field_validator("binding_path")
    @classmethod
    def validate_binding_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"binding_path must start with '/', got '{v}'")
        return v

    @model_validator(mode="after")
    def ensure_index(self) -> AddressMapComponent:
        if not self.index:
            self.index = str(uuid.uuid4())
        return self

    @property
    def dimension(self) -> str:
        return self.dimensions[0]

    @property
    def measure(self) -> str:
        return self.measures[0]
