# jsonshop/models.py
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

Number = Union[int, float]


class Product(BaseModel):
    # stored products may carry extra or nulled fields merged in by updates
    model_config = ConfigDict(extra="allow")

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Number] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = None
    stock: Optional[Number] = None


class CartItem(BaseModel):
    id: int
    quantity: int = 0


class Cart(BaseModel):
    id: int
    products: List[CartItem] = []
