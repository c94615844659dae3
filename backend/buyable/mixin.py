from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy import and_, inspect
from sqlalchemy.orm import declared_attr, foreign, reconstructor, relationship, remote

from buyable.errors import InvalidArgumentError
from buyable.morph import morph_alias
from buyable.records import BuyableRecord, Spec
from buyable.schemas import BuyableFields, BuyableResponse, SpecFields, SpecResponse

DEFAULT_SPEC = "default"

# "spec" to publiczna nazwa pola Spec.name
SPEC_KEY_ALIASES = {"spec": "name"}

RECORD_SCHEMAS = {Spec: SpecResponse, BuyableRecord: BuyableResponse}


def _validated(schema: Type[BaseModel], values: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return schema.model_validate(values).model_dump(exclude_unset=True)
    except ValidationError as exc:
        raise InvalidArgumentError(str(exc)) from exc


def _record_to_dict(record: Any) -> Dict[str, Any]:
    schema = RECORD_SCHEMAS.get(type(record))
    if schema is not None:
        return schema.model_validate(record).model_dump()
    state = inspect(record)
    return {attr.key: state.dict[attr.key] for attr in state.mapper.column_attrs if attr.key in state.dict}


class BuyableMixin:
    """
    Domieszka czyniaca dowolny model SQLAlchemy "kupowalnym".

    Model z ta domieszka ma relacje `specs` (warianty z cena, stanem i SKU)
    oraz `buyable` (jeden rekord z danymi zakupowymi, np. dostawca). Obie sa
    polimorficzne: wskazuja wlasciciela para (buyable_type, buyable_id).

    Zapisy pol wariantu i buyable nie trafiaja od razu do bazy, tylko do
    oczekujacych slownikow. Synchronizuje je `BuyableRepository` w hookach
    cyklu zycia (created, updated, deleted, retrieved).

    Attributes:
        spec_attributes: Rozpoznane klucze pol wariantu ("spec" to alias "name").
        buyable_attributes: Rozpoznane klucze pol buyable.
    """
    spec_attributes = ("spec", "price", "stock", "sku")
    buyable_attributes = ("vendor",)

    def __init__(self, **kwargs: Any) -> None:
        self._reset_buyable_state()
        self.fill(kwargs)

    @reconstructor
    def _init_on_load(self) -> None:
        self._reset_buyable_state()

    def _reset_buyable_state(self) -> None:
        self._spec_dirty: Dict[str, Any] = {}
        self._buyable_dirty: Dict[str, Any] = {}
        self._original_buyable: Dict[str, Any] = {}
        self._original_spec: Optional[Spec] = None
        self._specified = False

    @declared_attr
    def specs(cls):
        return relationship(
            Spec,
            primaryjoin=lambda: and_(
                cls.id == foreign(remote(Spec.buyable_id)),
                Spec.buyable_type == morph_alias(cls),
            ),
            order_by=Spec.id,
            viewonly=True,
        )

    @declared_attr
    def buyable(cls):
        return relationship(
            BuyableRecord,
            primaryjoin=lambda: and_(
                cls.id == foreign(remote(BuyableRecord.buyable_id)),
                BuyableRecord.buyable_type == morph_alias(cls),
            ),
            uselist=False,
            viewonly=True,
        )

    @classmethod
    def morph_type(cls) -> str:
        """
        Zwraca wartosc kolumny `buyable_type` dla tego typu wlasciciela.
        """
        return morph_alias(cls)

    # --- warianty ---

    def set_spec(self, key: str, value: Any) -> None:
        """
        Ustawia oczekujace pole wariantu.

        Args:
            key: Jeden z `spec_attributes`.
            value: Nowa wartosc.

        Raises:
            InvalidArgumentError: Gdy klucz nie jest polem wariantu lub wartosc jest niepoprawna.
        """
        if key not in self.spec_attributes:
            raise InvalidArgumentError(f"'{key}' is not a spec attribute")

        field = SPEC_KEY_ALIASES.get(key, key)
        self._spec_dirty = _validated(SpecFields, {**self._spec_dirty, field: value})
        self._specified = True

    def get_spec(self, key: str) -> Any:
        """
        Odczytuje pole wariantu.

        Wartosc oczekujaca ma pierwszenstwo. W przeciwnym razie odczyt idzie do
        wariantu wybranego przez `specify`, a dla produktu single-spec do jego
        jedynego zapisanego wariantu.

        Args:
            key: Jeden z `spec_attributes`.

        Returns:
            Any: Wartosc pola lub None, gdy `specify` nie znalazl wariantu.

        Raises:
            InvalidArgumentError: Gdy klucz nie jest polem wariantu albo wariant nie jest jednoznaczny.
        """
        if key not in self.spec_attributes:
            raise InvalidArgumentError(f"'{key}' is not a spec attribute")
        if not (self._specified or self.is_single_spec()):
            raise InvalidArgumentError("Didn't specify a spec or it's not a single spec buyable model")

        field = SPEC_KEY_ALIASES.get(key, key)
        spec = self._resolved_spec()
        if field in self._spec_dirty:
            return self._spec_dirty[field]
        return getattr(spec, field) if spec is not None else None

    def specify(self, selector: Union[Spec, int, str]) -> "BuyableMixin":
        """
        Wybiera zapisany wariant, do ktorego odnosza sie kolejne odczyty `get_spec`.

        Args:
            selector: Obiekt Spec, identyfikator wariantu (int lub ciag cyfr) albo nazwa.

        Returns:
            BuyableMixin: Ten sam obiekt, do lancuchowania wywolan.

        Raises:
            InvalidArgumentError: Gdy selektor ma nieobslugiwany typ.
        """
        if isinstance(selector, bool):
            raise InvalidArgumentError("Cannot specify a spec by bool")
        elif isinstance(selector, Spec):
            self._original_spec = selector
        elif isinstance(selector, int) or (isinstance(selector, str) and selector.isdigit()):
            spec_id = int(selector)
            self._original_spec = next((s for s in self._loaded_specs() if s.id == spec_id), None)
        elif isinstance(selector, str):
            self._original_spec = next((s for s in self._loaded_specs() if s.name == selector), None)
        else:
            raise InvalidArgumentError(f"Cannot specify a spec by {type(selector).__name__}")

        self._specified = True
        return self

    def is_single_spec(self) -> bool:
        return len(self._loaded_specs()) == 1

    def get_spec_dirty(self) -> Dict[str, Any]:
        return dict(self._spec_dirty)

    def is_spec_dirty(self) -> bool:
        return bool(self._spec_dirty)

    def spec_upsert_name(self) -> str:
        """
        Nazwa wariantu, po ktorej hook `updated` robi upsert.

        Kolejnosc: oczekujaca nazwa, nazwa wybranego wariantu, "default".
        """
        if self._spec_dirty.get("name") is not None:
            return self._spec_dirty["name"]
        spec = self._resolved_spec()
        if spec is not None and spec.name:
            return spec.name
        return DEFAULT_SPEC

    def _loaded_specs(self) -> List[Spec]:
        # niezaladowana relacja = brak wariantow; bez leniwego ladowania pod asyncio
        if "specs" in inspect(self).unloaded:
            return []
        return list(self.specs)

    def _resolved_spec(self) -> Optional[Spec]:
        if self.is_single_spec():
            self._original_spec = self._loaded_specs()[0]
        return self._original_spec

    # --- buyable ---

    def set_buyable(self, key: str, value: Any) -> None:
        """
        Ustawia oczekujace pole rekordu buyable.

        Raises:
            InvalidArgumentError: Gdy klucz nie jest polem buyable lub wartosc jest niepoprawna.
        """
        if key not in self.buyable_attributes:
            raise InvalidArgumentError(f"'{key}' is not a buyable attribute")

        self._buyable_dirty = _validated(BuyableFields, {**self._buyable_dirty, key: value})

    def get_buyable(self, key: str) -> Any:
        """
        Odczytuje pole buyable: wartosc oczekujaca, a w drugiej kolejnosci
        ostatnio zaladowany rekord.

        Raises:
            InvalidArgumentError: Gdy klucz nie jest polem buyable.
        """
        if key not in self.buyable_attributes:
            raise InvalidArgumentError(f"'{key}' is not a buyable attribute")

        if key in self._buyable_dirty:
            return self._buyable_dirty[key]
        return self._original_buyable.get(key)

    def set_original_buyable(self, key: str, value: Any) -> None:
        self._original_buyable[key] = value

    def sync_buyable_snapshot(self, record: Optional[BuyableRecord]) -> None:
        """
        Zastepuje migawke rozpoznanymi polami zapisanego rekordu buyable.

        Brak rekordu (None) zostawia pusta migawke.
        """
        self._original_buyable = {}
        if record is None:
            return
        for key in self.buyable_attributes:
            self.set_original_buyable(key, getattr(record, key))

    def get_buyable_dirty(self) -> Dict[str, Any]:
        return dict(self._buyable_dirty)

    def is_buyable_dirty(self) -> bool:
        return bool(self._buyable_dirty)

    # --- routing atrybutow ---

    def set_attribute(self, key: str, value: Any) -> "BuyableMixin":
        """
        Kieruje zapis klucza do pol wariantu, pol buyable lub kolumn modelu.

        Args:
            key: Nazwa atrybutu.
            value: Nowa wartosc.

        Returns:
            BuyableMixin: Ten sam obiekt.

        Raises:
            InvalidArgumentError: Gdy klucz nie jest ani polem spec/buyable, ani atrybutem modelu.
        """
        if key in self.spec_attributes:
            self.set_spec(key, value)
        elif key in self.buyable_attributes:
            self.set_buyable(key, value)
        else:
            self._set_native(key, value)
        return self

    def get_attribute(self, key: str) -> Any:
        """
        Odczyt z tym samym podzialem co `set_attribute`.
        """
        if key in self.spec_attributes:
            return self.get_spec(key)
        if key in self.buyable_attributes:
            return self.get_buyable(key)
        self._check_native(key)
        return getattr(self, key)

    def fill(self, attributes: Dict[str, Any]) -> "BuyableMixin":
        """
        Masowe ustawienie atrybutow.

        Podanie ceny oznacza wariant "default" (chyba ze klucz "spec" wskaze inna
        nazwe). Pola wariantu i buyable trafiaja do slownikow oczekujacych,
        reszta jest ustawiana na kolumnach modelu.

        Args:
            attributes: Slownik atrybutow.

        Returns:
            BuyableMixin: Ten sam obiekt.
        """
        attributes = dict(attributes)
        if attributes.get("price") is not None:
            self.set_spec("spec", DEFAULT_SPEC)

        for key in self.spec_attributes:
            if key in attributes:
                self.set_spec(key, attributes.pop(key))
        for key in self.buyable_attributes:
            if key in attributes:
                self.set_buyable(key, attributes.pop(key))

        for key, value in attributes.items():
            self._set_native(key, value)
        return self

    def _check_native(self, key: str) -> None:
        if key not in inspect(type(self)).attrs:
            raise InvalidArgumentError(f"'{key}' is not an attribute of {type(self).__name__}")

    def _set_native(self, key: str, value: Any) -> None:
        self._check_native(key)
        setattr(self, key, value)

    # --- serializacja ---

    def attributes_to_dict(self) -> Dict[str, Any]:
        state = inspect(self)
        return {attr.key: state.dict[attr.key] for attr in state.mapper.column_attrs if attr.key in state.dict}

    def relations_to_dict(self) -> Dict[str, Any]:
        state = inspect(self)
        data: Dict[str, Any] = {}
        for rel in state.mapper.relationships:
            if rel.key not in state.dict:
                continue
            value = state.dict[rel.key]
            if value is None:
                data[rel.key] = None
            elif rel.uselist:
                data[rel.key] = [_record_to_dict(item) for item in value]
            else:
                data[rel.key] = _record_to_dict(value)
        return data

    def single_spec_to_dict(self) -> Dict[str, Any]:
        if not self.is_single_spec():
            return {}
        return {key: self.get_spec(key) for key in self.spec_attributes}

    def buyable_to_dict(self) -> Dict[str, Any]:
        return {key: self.get_buyable(key) for key in self.buyable_attributes}

    def to_dict(self) -> Dict[str, Any]:
        """
        Plaska reprezentacja wlasciciela.

        Kolejnosc scalania (pozniejsze nadpisuja wczesniejsze): kolumny modelu,
        zaladowane relacje, pola jedynego wariantu (tylko single-spec), pola buyable.

        Returns:
            dict: Slownik gotowy do serializacji.
        """
        return {
            **self.attributes_to_dict(),
            **self.relations_to_dict(),
            **self.single_spec_to_dict(),
            **self.buyable_to_dict(),
        }
