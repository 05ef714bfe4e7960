# bookshelf/models.py
from pydantic import BaseModel, Field


class Book(BaseModel):
    id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1)
    author: str = ""
