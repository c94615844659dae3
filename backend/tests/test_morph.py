"""
Testy mapy aliasow typow wlascicieli.
"""
import pytest

from buyable import morph
from buyable.errors import InvalidArgumentError
from buyable.models import Product
from buyable.records import Spec


class Catalogue:
    pass


def test_registered_alias_round_trip() -> None:
    """
    Test aliasu zarejestrowanego przez model Product.
    """
    assert morph.morph_alias(Product) == "product"
    assert morph.resolve_morph("product") is Product


def test_unregistered_class_falls_back_to_qualified_name() -> None:
    """
    Test nazwy `modul.Klasa` dla klasy bez aliasu i jej odwrotnego rozwiazania.
    """
    alias = morph.morph_alias(Spec)
    assert alias == "buyable.records.Spec"
    assert morph.resolve_morph(alias) is Spec


def test_morph_map_registers_alias(monkeypatch) -> None:
    monkeypatch.setattr(morph, "MORPH_MAP", dict(morph.MORPH_MAP))

    morph.morph_map({"catalogue": Catalogue})

    assert morph.morph_alias(Catalogue) == "catalogue"
    assert morph.resolve_morph("catalogue") is Catalogue


@pytest.mark.parametrize("alias", ["nothing", "buyable.records.Missing", "no_such_module.Thing"])
def test_unknown_alias_fails(alias) -> None:
    with pytest.raises(InvalidArgumentError):
        morph.resolve_morph(alias)
