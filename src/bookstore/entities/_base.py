import uuid

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class CatalogEntity(BaseModel):
    """Base for catalog entities whose integer id is assigned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = PydanticField(
        default=None, description="Store-assigned identifier, None until created"
    )


class CatalogTable(SQLModel, table=False):
    """Base persistence model with an autoincrement integer primary key."""

    id: int | None = Field(default=None, primary_key=True)


def new_uuid() -> str:
    return str(uuid.uuid4())


class IdentityTable(SQLModel, table=False):
    """Base persistence model for identity records keyed by UUID strings."""

    id: str = Field(
        primary_key=True,
        default_factory=new_uuid,
        description="Unique identifier for the record",
    )
