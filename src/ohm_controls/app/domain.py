"""Entities of the demo service."""

from pydantic import BaseModel


class Customer(BaseModel):
    id: int | None = None
    name: str = ""


class Order(BaseModel):
    id: int | None = None
    product: str = ""
    cost: float = 0.0
    customer_id: int | None = None
