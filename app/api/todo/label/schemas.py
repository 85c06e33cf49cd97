from pydantic import BaseModel, Field, model_validator
from typing import Optional

class LabelBase(BaseModel):
    name: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)

class LabelCreate(LabelBase):
    pass

class LabelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def require_one_field(self):
        if self.name is None and self.color is None:
            raise ValueError("At least one field (name or color) is required")
        return self

class LabelOut(LabelBase):
    id: int

    model_config = {
        "from_attributes": True
    }
