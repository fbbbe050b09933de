# jsonshop/core.py
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .models import Cart, Number, Product

# This file holds the request bodies and response envelopes of the API.

# ---------------------------
# Request bodies
# ---------------------------
class ProductIn(BaseModel):
    # every field is optional here so the manager can report all missing ones at once
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Number] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = None
    stock: Optional[Number] = None


class ProductUpdate(BaseModel):
    # a client "id" lands in the extras whatever its type; the manager drops it
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Number] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = None
    stock: Optional[Number] = None


class AddToCartIn(BaseModel):
    quantity: int = 1


# ---------------------------
# Responses
# ---------------------------
class ProductMessage(BaseModel):
    message: str
    product: Product


class CartMessage(BaseModel):
    message: str
    cart: Cart


class ErrorOut(BaseModel):
    detail: str
