from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class JobFilterModel(BaseModel):
    """Base for the package's pydantic models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)
