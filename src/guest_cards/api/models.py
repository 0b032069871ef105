"""Pydantic models for guest card request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class FillImageRequest(BaseModel):
    """Body of POST /fill-image.

    Name and number are optional here so the handler can answer a missing
    field with its own 400 payload.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str | None = None
    number: str | None = None
    two_names: bool | None = Field(default=False, alias="twoNames")
