# app/models.py
from pydantic import BaseModel, ConfigDict

class Variant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    price: str
