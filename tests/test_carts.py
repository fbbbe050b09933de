# tests/test_carts.py
import asyncio
import json

import pytest

from jsonshop.database import FileStore
from jsonshop.errors import NotFound, ValidationFailure
from jsonshop.managers import CartManager

from .conftest import write_json


async def _manager(path) -> CartManager:
    manager = CartManager(FileStore(path))
    await manager.initialize()
    return manager


@pytest.mark.asyncio
async def test_new_cart_is_empty_with_fresh_id(carts_path):
    cm = await _manager(carts_path)
    first = await cm.add_cart()
    second = await cm.add_cart()

    assert first == {"id": 1, "products": []}
    assert second["id"] == 2


@pytest.mark.asyncio
async def test_ids_follow_existing_file(carts_path):
    write_json(carts_path, [{"id": 3, "products": []}])
    cm = await _manager(carts_path)

    assert (await cm.add_cart())["id"] == 4


@pytest.mark.asyncio
async def test_unknown_cart(carts_path):
    cm = await _manager(carts_path)
    with pytest.raises(NotFound):
        cm.get_cart_by_id(1)
    with pytest.raises(NotFound):
        cm.get_products_in_cart(1)
    with pytest.raises(NotFound):
        await cm.add_product_to_cart(1, 7, 1)


@pytest.mark.asyncio
async def test_repeated_product_increments_quantity(carts_path):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    await cm.add_product_to_cart(cart["id"], 7, 2)
    await cm.add_product_to_cart(cart["id"], 7, 3)
    assert cm.get_products_in_cart(cart["id"]) == [{"id": 7, "quantity": 5}]


@pytest.mark.asyncio
async def test_new_product_is_appended_in_order(carts_path):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    await cm.add_product_to_cart(cart["id"], 7, 2)
    updated = await cm.add_product_to_cart(cart["id"], 9, 1)
    assert updated["products"] == [{"id": 7, "quantity": 2}, {"id": 9, "quantity": 1}]


@pytest.mark.asyncio
async def test_default_quantity_is_one(carts_path):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    await cm.add_product_to_cart(cart["id"], 3)
    assert cm.get_products_in_cart(cart["id"]) == [{"id": 3, "quantity": 1}]


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -2, 1.5, True])
async def test_bad_quantity_is_rejected(carts_path, quantity):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    with pytest.raises(ValidationFailure):
        await cm.add_product_to_cart(cart["id"], 3, quantity)
    assert cm.get_products_in_cart(cart["id"]) == []


@pytest.mark.asyncio
async def test_returned_cart_is_a_copy(carts_path):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    cm.get_products_in_cart(cart["id"]).append({"id": 1, "quantity": 1})
    assert cm.get_cart_by_id(cart["id"]) == {"id": cart["id"], "products": []}


@pytest.mark.asyncio
async def test_save_and_reload_round_trip(carts_path):
    cm = await _manager(carts_path)
    a = await cm.add_cart()
    b = await cm.add_cart()
    await cm.add_product_to_cart(b["id"], 9, 4)
    await cm.add_product_to_cart(a["id"], 1, 1)

    on_disk = json.loads(carts_path.read_text(encoding="utf-8"))
    assert on_disk == [
        {"id": 1, "products": [{"id": 1, "quantity": 1}]},
        {"id": 2, "products": [{"id": 9, "quantity": 4}]},
    ]
    reloaded = await _manager(carts_path)
    assert reloaded.get_cart_by_id(1) == cm.get_cart_by_id(1)
    assert reloaded.get_cart_by_id(2) == cm.get_cart_by_id(2)


@pytest.mark.asyncio
async def test_concurrent_additions_are_not_lost(carts_path):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    await asyncio.gather(*(cm.add_product_to_cart(cart["id"], 7, 1) for _ in range(25)))
    assert cm.get_products_in_cart(cart["id"]) == [{"id": 7, "quantity": 25}]

    reloaded = await _manager(carts_path)
    assert reloaded.get_products_in_cart(cart["id"]) == [{"id": 7, "quantity": 25}]


@pytest.mark.asyncio
async def test_concurrent_cart_creation_gives_unique_ids(carts_path):
    cm = await _manager(carts_path)
    carts = await asyncio.gather(*(cm.add_cart() for _ in range(10)))

    assert sorted(c["id"] for c in carts) == list(range(1, 11))
    reloaded = await _manager(carts_path)
    assert len(reloaded) == 10


@pytest.mark.asyncio
async def test_entry_without_quantity_is_incremented(carts_path):
    write_json(carts_path, [{"id": 1, "products": [{"id": 7}]}])
    cm = await _manager(carts_path)

    await cm.add_product_to_cart(1, 7, 2)
    assert cm.get_products_in_cart(1) == [{"id": 7, "quantity": 2}]


@pytest.mark.asyncio
async def test_bad_quantity_is_logged(carts_path, caplog):
    cm = await _manager(carts_path)
    cart = await cm.add_cart()

    with pytest.raises(ValidationFailure):
        await cm.add_product_to_cart(cart["id"], 3, 0)
    assert "Rejected quantity 0" in caplog.text
