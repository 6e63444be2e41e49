"""Pydantic models for records passed into the query functions.

Inserts and searches are validated here before any SQL is built, so a bad
record fails with a ``ValidationError`` instead of a database error.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class UserCreate(BaseModel):
    """New user account.

    Example:
        user = UserCreate(name="Eva Stanley", email="sebastianguerra@ymail.com", password="$2a$10$...")
    """

    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., min_length=3, description="Login email, unique per user")
    password: str = Field(..., min_length=1, description="Password hash")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a single '@' with text on both sides."""
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain or "@" in domain:
            raise ValueError(f"Invalid email address: {v}")
        return v


class PropertyCreate(BaseModel):
    """New property listing.

    ``cost_per_night`` is stored as given, in cents.
    """

    model_config = {"str_strip_whitespace": True}

    owner_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int = Field(..., ge=0, description="Nightly price in cents")

    street: str
    city: str = Field(..., min_length=1)
    province: str
    post_code: str
    country: str

    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)


class PropertySearchOptions(BaseModel):
    """Sparse filter set for property search.

    Every field is optional; a missing field adds no condition. Prices are
    in whole currency units and get converted to cents when the query is
    built. Blank strings (as sent by HTML forms) count as missing.
    """

    model_config = {"str_strip_whitespace": True}

    owner_id: Optional[int] = None
    city: Optional[str] = None
    minimum_price_per_night: Optional[float] = Field(None, ge=0)
    maximum_price_per_night: Optional[float] = Field(None, ge=0)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_price_range(self):
        """Ensure the minimum price does not exceed the maximum."""
        low, high = self.minimum_price_per_night, self.maximum_price_per_night
        if low is not None and high is not None and low > high:
            raise ValueError(
                f"minimum_price_per_night ({low}) cannot exceed maximum_price_per_night ({high})"
            )
        return self
