from sqlalchemy import Column, Integer, String
from buyable.database import Base

class Spec(Base):
    """
    Model SQLAlchemy reprezentujacy wariant produktu (spec).

    Wlasciciel jest wskazywany polimorficznie para (buyable_type, buyable_id),
    wiec jedna tabela obsluguje wszystkie typy modeli z `BuyableMixin`.

    Attributes:
        id: Unikalny identyfikator wariantu.
        name: Nazwa wariantu, np. "default" lub "large". Klucz upsertu w obrebie wlasciciela.
        price: Cena w najmniejszej jednostce waluty.
        stock: Stan magazynowy.
        sku: Kod SKU wariantu.
        buyable_type: Alias typu wlasciciela.
        buyable_id: Identyfikator wlasciciela.
    """
    __tablename__ = "specs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    price = Column(Integer)
    stock = Column(Integer)
    sku = Column(String, nullable=True)
    buyable_type = Column(String, nullable=False, index=True)
    buyable_id = Column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Spec {self.name} of {self.buyable_type}#{self.buyable_id}>"

class BuyableRecord(Base):
    """
    Model SQLAlchemy z danymi zakupowymi niezaleznymi od wariantu.

    Dokladnie jeden rekord na wlasciciela.

    Attributes:
        id: Unikalny identyfikator rekordu.
        vendor: Dostawca.
        buyable_type: Alias typu wlasciciela.
        buyable_id: Identyfikator wlasciciela.
    """
    __tablename__ = "buyables"

    id = Column(Integer, primary_key=True, index=True)
    vendor = Column(String, nullable=True)
    buyable_type = Column(String, nullable=False, index=True)
    buyable_id = Column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<BuyableRecord {self.buyable_type}#{self.buyable_id}>"
