from typing import Optional

from pydantic import BaseModel, ConfigDict, constr, field_validator

TitleStr = constr(min_length=1, max_length=200, strip_whitespace=True)

# posts.id is a SERIAL (32-bit) key.
POST_ID_MAX = 2**31 - 1


class PostCreate(BaseModel):
    title: TitleStr
    content: Optional[str] = None
    # Accepted so clients can send it; the scoped client overwrites it
    # with the tenant from the request header.
    tenant_id: Optional[int] = None


class PostUpdate(BaseModel):
    title: Optional[TitleStr] = None
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, value):
        # Omit title to keep it; an explicit null would clear a NOT NULL column.
        if value is None:
            raise ValueError("title cannot be null")
        return value


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: Optional[str] = None
    tenant_id: int


class BulkCreateResult(BaseModel):
    count: int
