"""
Testy tablicy callbackow cyklu zycia.
"""
import pytest

from buyable.errors import InvalidArgumentError
from buyable.hooks import LifecycleHooks


@pytest.mark.asyncio
async def test_fire_calls_hooks_in_registration_order() -> None:
    """
    Test kolejnosci wywolan: callbacki dzialaja w kolejnosci rejestracji.
    """
    hooks = LifecycleHooks()
    calls = []

    async def first(owner) -> None:
        calls.append(("first", owner))

    async def second(owner) -> None:
        calls.append(("second", owner))

    hooks.register("saved", first)
    hooks.register("saved", second)
    await hooks.fire("saved", "owner")
    await hooks.fire("updated", "owner")

    assert calls == [("first", "owner"), ("second", "owner")]


@pytest.mark.asyncio
async def test_unregister_removes_hook() -> None:
    hooks = LifecycleHooks()
    calls = []

    async def hook(owner) -> None:
        calls.append(owner)

    hooks.register("deleted", hook)
    hooks.unregister("deleted", hook)
    await hooks.fire("deleted", "owner")

    assert calls == []


@pytest.mark.asyncio
async def test_hook_error_propagates() -> None:
    """
    Test propagacji bledu: wyjatek callbacku przerywa `fire` i nie wywoluje kolejnych.
    """
    hooks = LifecycleHooks()
    calls = []

    async def broken(owner) -> None:
        raise RuntimeError("index down")

    async def after(owner) -> None:
        calls.append(owner)

    hooks.register("created", broken)
    hooks.register("created", after)

    with pytest.raises(RuntimeError):
        await hooks.fire("created", "owner")
    assert calls == []


@pytest.mark.asyncio
async def test_unknown_event_fails() -> None:
    hooks = LifecycleHooks()

    async def hook(owner) -> None:
        pass

    with pytest.raises(InvalidArgumentError):
        hooks.register("archived", hook)
    with pytest.raises(InvalidArgumentError):
        await hooks.fire("archived", "owner")
