import importlib
from typing import Dict

from buyable.errors import InvalidArgumentError

# alias -> klasa wlasciciela, zapisywany w kolumnie buyable_type
MORPH_MAP: Dict[str, type] = {}


def morph_map(mapping: Dict[str, type]) -> Dict[str, type]:
    """
    Rejestruje krotkie aliasy typow wlascicieli dla relacji polimorficznych.

    Aliasy musza byc zarejestrowane przed konfiguracja mapperow SQLAlchemy
    (pierwsze zapytanie lub utworzenie obiektu), bo warunki zlaczen relacji
    `specs` i `buyable` sa wyliczane wlasnie wtedy.

    Args:
        mapping: Slownik alias -> klasa modelu.

    Returns:
        Dict[str, type]: Aktualna mapa aliasow.
    """
    MORPH_MAP.update(mapping)
    return MORPH_MAP


def morph_alias(cls: type) -> str:
    """
    Zwraca alias typu uzywany w kolumnie `buyable_type`.

    Args:
        cls: Klasa wlasciciela.

    Returns:
        str: Zarejestrowany alias lub pelna nazwa `modul.Klasa`, gdy alias nie istnieje.
    """
    for alias, mapped in MORPH_MAP.items():
        if mapped is cls:
            return alias
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_morph(alias: str) -> type:
    """
    Odwzorowuje wartosc `buyable_type` z powrotem na klase wlasciciela.

    Args:
        alias: Alias z mapy lub pelna nazwa `modul.Klasa`.

    Returns:
        type: Klasa wlasciciela.

    Raises:
        InvalidArgumentError: Gdy aliasu nie da sie rozwiazac.
    """
    if alias in MORPH_MAP:
        return MORPH_MAP[alias]

    module_name, _, class_name = alias.rpartition(".")
    if not module_name:
        raise InvalidArgumentError(f"Unknown buyable type: {alias}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidArgumentError(f"Unknown buyable type: {alias}") from exc

    cls = getattr(module, class_name, None)
    if not isinstance(cls, type):
        raise InvalidArgumentError(f"Unknown buyable type: {alias}")
    return cls
