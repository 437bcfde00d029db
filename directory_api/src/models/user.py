"""
User models.

User is the only domain entity: a store-assigned integer id and a name.
"""

from pydantic import BaseModel, Field, StrictStr


class User(BaseModel):
    """A row of the users table."""
    id: int = Field(
        ...,
        description="Store-assigned identifier"
    )
    name: str = Field(
        ...,
        description="Display name"
    )

    model_config = {
        "from_attributes": True,
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "name": "Ada"
            }
        }
    }


class NewUser(BaseModel):
    """Create user request schema."""
    name: StrictStr = Field(
        ...,
        description="Display name (required, must be a string)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ada"
            }
        }
    }
