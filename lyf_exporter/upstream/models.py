"""Schemas for the Lyf kitty API payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Kitty(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = ""
    owner_id: str = Field("", alias="ownerId")
    owner_first_name: str = Field("", alias="ownerFirstName")
    owner_last_name: str = Field("", alias="ownerLastName")
    contributions_counter: int = Field(0, alias="contributionsCounter")
    total_collected_amount: int = Field(0, alias="totalCollectedAmount", description="Amount in cents")

    @property
    def label_values(self) -> tuple[str, str, str, str]:
        """Label tuple used for the exported gauges."""

        return (self.owner_first_name, self.owner_last_name, self.owner_id, self.id)


class KittyResponse(BaseModel):
    """Body of ``GET /public/api/kitties/{uuid}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    kitty: Kitty = Field(default_factory=Kitty)
    available: int = 0


__all__ = ["Kitty", "KittyResponse"]
