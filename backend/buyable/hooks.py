from typing import Any, Awaitable, Callable, Dict, List

from buyable.errors import InvalidArgumentError
from buyable.logging_config import get_logger

logger = get_logger("hooks")

Hook = Callable[[Any], Awaitable[None]]

EVENTS = ("created", "updated", "deleted", "retrieved", "saved")

class LifecycleHooks:
    """
    Zarzadza callbackami cyklu zycia wlasciciela i wywoluje je po kolei.

    Kazde repozytorium ma wlasna tablice. Callbacki wywolywane sa w kolejnosci
    rejestracji, wyjatek callbacku przerywa `fire` i leci do wywolujacego.

    Attributes:
        listeners: Slownik zdarzenie -> lista callbackow.
    """
    def __init__(self) -> None:
        self.listeners: Dict[str, List[Hook]] = {event: [] for event in EVENTS}

    def _check(self, event: str) -> None:
        if event not in self.listeners:
            raise InvalidArgumentError(f"Unknown lifecycle event: {event}")

    def register(self, event: str, hook: Hook) -> None:
        """
        Dodaje callback do zdarzenia.

        Args:
            event: Jedno z: created, updated, deleted, retrieved, saved.
            hook: Asynchroniczny callback przyjmujacy wlasciciela.

        Raises:
            InvalidArgumentError: Gdy zdarzenie jest nieznane.
        """
        self._check(event)
        self.listeners[event].append(hook)

    def unregister(self, event: str, hook: Hook) -> None:
        """
        Usuwa callback ze zdarzenia.

        Args:
            event: Nazwa zdarzenia.
            hook: Wczesniej zarejestrowany callback.
        """
        self._check(event)
        self.listeners[event].remove(hook)

    async def fire(self, event: str, owner: Any) -> None:
        """
        Wywoluje wszystkie callbacki zdarzenia dla danego wlasciciela.

        Args:
            event: Nazwa zdarzenia.
            owner: Obiekt modelu z `BuyableMixin`.
        """
        self._check(event)
        logger.debug("Firing %s for %r", event, owner)
        for hook in list(self.listeners[event]):
            await hook(owner)
