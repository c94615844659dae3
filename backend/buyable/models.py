from sqlalchemy import Column, Integer, String
from buyable.database import Base
from buyable.mixin import BuyableMixin
from buyable.morph import morph_map

class Product(BuyableMixin, Base):
    """
    Model SQLAlchemy reprezentujacy produkt z wariantami.

    Cena, stan i SKU nie sa kolumnami produktu: zyja w wariantach (`specs`),
    a dostawca w rekordzie `buyable`.

    Attributes:
        id: Unikalny identyfikator produktu.
        name: Nazwa produktu.
        description: Opcjonalny opis produktu.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    description = Column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name}>"

morph_map({"product": Product})
