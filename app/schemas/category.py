from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryCreate(CategoryBase):
    # Optional caller-assigned id; generated when omitted
    id: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryRecord(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

