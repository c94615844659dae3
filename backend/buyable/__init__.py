from buyable.errors import InvalidArgumentError
from buyable.hooks import LifecycleHooks
from buyable.mixin import BuyableMixin
from buyable.models import Product
from buyable.morph import morph_alias, morph_map, resolve_morph
from buyable.records import BuyableRecord, Spec
from buyable.repository import BuyableRepository

__all__ = [
    "BuyableMixin",
    "BuyableRecord",
    "BuyableRepository",
    "InvalidArgumentError",
    "LifecycleHooks",
    "Product",
    "Spec",
    "morph_alias",
    "morph_map",
    "resolve_morph",
]
