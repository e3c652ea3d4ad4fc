from pydantic import BaseModel, Field, field_validator
from typing import Optional

class PlayerBase(BaseModel):
    name: str = Field(..., min_length=1, description="Display name of the player")
    phone_number: Optional[str] = Field(None, description="Optional contact phone")

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

class PlayerCreate(PlayerBase):
    pass

class PlayerRead(BaseModel):
    id: int
    name: str
    phone_number: Optional[str] = None

    class Config:
        from_attributes = True
