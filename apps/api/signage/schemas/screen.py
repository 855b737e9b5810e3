"""Screen API schemas."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class Screen(BaseModel):
    id: str
    name: str
    is_active: bool = Field(alias="isActive")

    model_config = ConfigDict(populate_by_name=True)


class UpdateScreenRequest(BaseModel):
    is_active: StrictBool = Field(alias="isActive")

    model_config = ConfigDict(populate_by_name=True)


class UpdateScreenResponse(BaseModel):
    message: str
    screen: Screen
