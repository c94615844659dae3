from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from buyable.hooks import LifecycleHooks
from buyable.logging_config import get_logger
from buyable.mixin import BuyableMixin
from buyable.morph import resolve_morph
from buyable.records import BuyableRecord, Spec

logger = get_logger("repository")

T = TypeVar("T", bound=BuyableMixin)

class BuyableRepository(Generic[T]):
    """
    Repozytorium wlascicieli danego typu, synchronizujace warianty i rekord buyable.

    Kazdy odczyt laduje od razu relacje `specs` i `buyable`, wiec wlasciciel
    jest zawsze kompletny bez dodatkowych zapytan. Zapis i usuniecie wywoluja
    hooki cyklu zycia z `hooks`; wbudowane hooki sa rejestrowane jako pierwsze,
    callbacki aplikacji (np. cache, indeksowanie) dzialaja po nich.

    Kazdy krok (wlasciciel, wariant, buyable) jest osobnym commitem. Blad
    w srodku sekwencji nie cofa krokow juz zapisanych.

    Attributes:
        session: Asynchroniczna sesja bazy danych.
        model: Klasa wlasciciela z `BuyableMixin`.
        hooks: Tablica callbackow cyklu zycia.
    """
    def __init__(self, session: AsyncSession, model: Type[T]) -> None:
        self.session = session
        self.model = model
        self.hooks = LifecycleHooks()
        self.hooks.register("created", self._sync_created)
        self.hooks.register("updated", self._sync_updated)
        self.hooks.register("deleted", self._sync_deleted)
        self.hooks.register("retrieved", self._sync_retrieved)

    def _query(self):
        return (
            select(self.model)
            .options(selectinload(self.model.specs), selectinload(self.model.buyable))
            .execution_options(populate_existing=True)
        )

    async def _commit(self, owner: T) -> None:
        """
        Commit, a potem odswiezenie wlasciciela razem z relacjami.

        Sesja z `expire_on_commit=True` wygasza wlasciciela i jego warianty po
        kazdym commicie; kolejne hooki czytaja je ponownie bez leniwego ladowania.

        Args:
            owner: Wlasciciel zapisywany w biezacym kroku.
        """
        await self.session.commit()
        await self.session.refresh(owner)
        result = await self.session.execute(self._query().filter(self.model.id == owner.id))
        result.scalar_one()

    async def get(self, owner_id: int) -> Optional[T]:
        """
        Pobiera wlasciciela po ID razem z wariantami i rekordem buyable.

        Args:
            owner_id: ID wlasciciela.

        Returns:
            Optional[T]: Wlasciciel lub None, gdy nie istnieje.
        """
        result = await self.session.execute(self._query().filter(self.model.id == owner_id))
        owner = result.scalar_one_or_none()
        if owner is not None:
            await self.hooks.fire("retrieved", owner)
        return owner

    async def get_many(self, skip: int = 0, limit: int = 100) -> List[T]:
        """
        Pobiera liste wlascicieli z paginacja.

        Args:
            skip: Liczba wlascicieli do pominiecia (domyslnie 0).
            limit: Maksymalna liczba wlascicieli do zwrocenia (domyslnie 100).

        Returns:
            List[T]: Lista wlascicieli.
        """
        result = await self.session.execute(self._query().order_by(self.model.id).offset(skip).limit(limit))
        owners = list(result.scalars().all())
        for owner in owners:
            await self.hooks.fire("retrieved", owner)
        return owners

    async def create(self, attributes: Dict[str, Any]) -> T:
        """
        Tworzy i zapisuje nowego wlasciciela z atrybutow (kolumny, pola spec i buyable).
        """
        return await self.save(self.model(**attributes))

    async def update(self, owner: T, attributes: Dict[str, Any]) -> T:
        """
        Uzupelnia atrybuty wlasciciela przez `fill` i zapisuje go.
        """
        owner.fill(attributes)
        return await self.save(owner)

    async def save(self, owner: T) -> T:
        """
        Zapisuje wlasciciela i synchronizuje jego warianty oraz rekord buyable.

        Nowy wlasciciel wywoluje `created`, zmiana kolumn `updated`. Gdy
        wlasciciel istnieje i ma oczekujace pola spec/buyable, `updated` jest
        wywolywane takze bez zmian w kolumnach, zeby sluchacze widzieli zmiany
        wariantow. `saved` wywolywane jest raz, na koncu.

        Args:
            owner: Wlasciciel do zapisania.

        Returns:
            T: Ten sam wlasciciel z przeladowanymi relacjami.
        """
        creating = not inspect(owner).has_identity
        self.session.add(owner)
        native_dirty = creating or self.session.is_modified(owner)
        await self._commit(owner)
        logger.debug("Saved %r (created=%s)", owner, creating)

        fired_updated = False
        if creating:
            await self.hooks.fire("created", owner)
        elif native_dirty:
            await self.hooks.fire("updated", owner)
            fired_updated = True

        if not fired_updated and inspect(owner).persistent and (owner.is_spec_dirty() or owner.is_buyable_dirty()):
            await self.hooks.fire("updated", owner)

        await self.get(owner.id)
        await self.hooks.fire("saved", owner)
        return owner

    async def delete(self, owner: T) -> None:
        """
        Usuwa wlasciciela i wywoluje `deleted`. Rekord buyable zostaje w bazie.

        Args:
            owner: Wlasciciel do usuniecia.
        """
        await self.session.delete(owner)
        await self.session.commit()
        await self.hooks.fire("deleted", owner)

    async def owner_of(self, record: Any) -> Optional[Any]:
        """
        Zwraca wlasciciela wariantu lub rekordu buyable na podstawie pary (buyable_type, buyable_id).

        Args:
            record: Obiekt Spec lub BuyableRecord.

        Returns:
            Optional[Any]: Wlasciciel lub None, gdy nie istnieje.

        Raises:
            InvalidArgumentError: Gdy `buyable_type` nie odpowiada zadnej klasie.
        """
        cls = resolve_morph(record.buyable_type)
        if cls is self.model:
            return await self.get(record.buyable_id)
        if issubclass(cls, BuyableMixin):
            return await BuyableRepository(self.session, cls).get(record.buyable_id)
        return await self.session.get(cls, record.buyable_id)

    async def _sync_created(self, owner: T) -> None:
        if owner.is_spec_dirty():
            values = owner.get_spec_dirty()
            values.setdefault("name", owner.spec_upsert_name())
            self.session.add(Spec(**values, buyable_type=owner.morph_type(), buyable_id=owner.id))
            await self._commit(owner)
            logger.info("Created spec %s for %s#%s", values["name"], owner.morph_type(), owner.id)

        self.session.add(BuyableRecord(**owner.get_buyable_dirty(), buyable_type=owner.morph_type(), buyable_id=owner.id))
        await self._commit(owner)
        logger.info("Created buyable for %s#%s", owner.morph_type(), owner.id)

    async def _sync_updated(self, owner: T) -> None:
        if owner.is_spec_dirty():
            name = owner.spec_upsert_name()
            values = {**owner.get_spec_dirty(), "name": name}
            result = await self.session.execute(
                select(Spec).filter(
                    Spec.buyable_type == owner.morph_type(),
                    Spec.buyable_id == owner.id,
                    Spec.name == name,
                )
            )
            spec = result.scalars().first()
            if spec is None:
                self.session.add(Spec(**values, buyable_type=owner.morph_type(), buyable_id=owner.id))
            else:
                for key, value in values.items():
                    setattr(spec, key, value)
            await self._commit(owner)
            logger.info("Upserted spec %s for %s#%s", name, owner.morph_type(), owner.id)

        if owner.is_buyable_dirty():
            result = await self.session.execute(
                select(BuyableRecord).filter(
                    BuyableRecord.buyable_type == owner.morph_type(),
                    BuyableRecord.buyable_id == owner.id,
                )
            )
            record = result.scalars().first()
            if record is None:
                self.session.add(BuyableRecord(**owner.get_buyable_dirty(), buyable_type=owner.morph_type(), buyable_id=owner.id))
            else:
                for key, value in owner.get_buyable_dirty().items():
                    setattr(record, key, value)
            await self._commit(owner)
            logger.info("Upserted buyable for %s#%s", owner.morph_type(), owner.id)

    async def _sync_deleted(self, owner: T) -> None:
        # usuniety obiekt: ID z klucza tozsamosci, bez odczytu atrybutow
        owner_id = inspect(owner).identity[0]
        await self.session.execute(
            delete(Spec).where(
                Spec.buyable_type == owner.morph_type(),
                Spec.buyable_id == owner_id,
            )
        )
        await self.session.commit()
        logger.info("Deleted specs of %s#%s", owner.morph_type(), owner_id)

    async def _sync_retrieved(self, owner: T) -> None:
        if "buyable" in inspect(owner).unloaded:
            return
        owner.sync_buyable_snapshot(owner.buyable)
