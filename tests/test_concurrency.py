# tests/test_concurrency.py
import asyncio

import httpx
import pytest

from .conftest import product_fields


@pytest.mark.asyncio
async def test_concurrent_cart_additions(app):
    # ASGITransport does not run the lifespan, so load the files by hand
    await app.state.products.initialize()
    await app.state.carts.initialize()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        pid = (await ac.post("/products", json=product_fields(1))).json()["product"]["id"]
        cid = (await ac.post("/carts")).json()["cart"]["id"]

        results = await asyncio.gather(*(
            ac.post(f"/carts/{cid}/product/{pid}", json={"quantity": 1}) for _ in range(20)
        ))
        assert all(r.status_code == 200 for r in results)

        r = await ac.get(f"/carts/{cid}")
        assert r.json() == [{"id": pid, "quantity": 20}]


@pytest.mark.asyncio
async def test_concurrent_product_creation_same_code(app):
    await app.state.products.initialize()
    await app.state.carts.initialize()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        results = await asyncio.gather(*(
            ac.post("/products", json=product_fields(n, code="SAME")) for n in range(5)
        ))
        statuses = sorted(r.status_code for r in results)
        # exactly one create wins the code
        assert statuses == [201, 400, 400, 400, 400]
        assert len((await ac.get("/products")).json()) == 1
