from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class SpecFields(BaseModel):
    """
    Oczekujace (niezapisane) pola wariantu. Wszystkie pola sa opcjonalne,
    do zapisu trafiaja tylko pola ustawione (`exclude_unset`).

    Attributes:
        name: Nazwa wariantu.
        price: Cena w najmniejszej jednostce waluty.
        stock: Stan magazynowy.
        sku: Kod SKU.
    """
    name: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class BuyableFields(BaseModel):
    """
    Oczekujace pola rekordu buyable.

    Attributes:
        vendor: Dostawca.
    """
    vendor: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class SpecResponse(BaseModel):
    """
    Schemat do zwracania danych wariantu.
    """
    id: int
    name: Optional[str] = None
    price: Optional[int] = None
    stock: Optional[int] = None
    sku: Optional[str] = None
    buyable_type: str
    buyable_id: int

    model_config = ConfigDict(from_attributes=True)

class BuyableResponse(BaseModel):
    """
    Schemat do zwracania rekordu buyable.
    """
    id: int
    vendor: Optional[str] = None
    buyable_type: str
    buyable_id: int

    model_config = ConfigDict(from_attributes=True)
