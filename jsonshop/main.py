# jsonshop/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings, load_settings
from .core import AddToCartIn, CartMessage, ErrorOut, ProductIn, ProductMessage, ProductUpdate
from .database import FileStore
from .errors import NotFound, ValidationFailure
from .log import configure_logging
from .managers import CartManager, ProductManager
from .models import CartItem, Product

logger = logging.getLogger(__name__)

router = APIRouter()

ERRORS: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
}


# ---------------------------
# Dependencies
# ---------------------------
def get_products(request: Request) -> ProductManager:
    return request.app.state.products


def get_carts(request: Request) -> CartManager:
    return request.app.state.carts


# ---------------------------
# Health
# ---------------------------
@router.get("/", response_class=PlainTextResponse)
async def root():
    return "jsonshop server"


# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/products", response_model=List[Product])
async def list_products(
    limit: Optional[int] = Query(None),
    manager: ProductManager = Depends(get_products),
):
    return manager.get_products(limit)


@router.get("/products/{pid}", response_model=Product, responses=ERRORS)
async def get_product(pid: int, manager: ProductManager = Depends(get_products)):
    return manager.get_product_by_id(pid)


@router.post("/products", status_code=201, response_model=ProductMessage, responses=ERRORS)
async def add_product(payload: ProductIn, manager: ProductManager = Depends(get_products)):
    product = await manager.add_product(payload.model_dump())
    return {"message": f"Product {product['id']} added", "product": product}


@router.put("/products/{pid}", response_model=ProductMessage, responses=ERRORS)
async def update_product(
    pid: int,
    payload: ProductUpdate,
    manager: ProductManager = Depends(get_products),
):
    product = await manager.update_product(pid, payload.model_dump(exclude_unset=True))
    return {"message": f"Product {pid} updated", "product": product}


@router.delete("/products/{pid}", response_model=ProductMessage, responses=ERRORS)
async def delete_product(pid: int, manager: ProductManager = Depends(get_products)):
    product = await manager.delete_product(pid)
    return {"message": f"Product {pid} deleted", "product": product}


# ---------------------------
# Cart endpoints
# ---------------------------
@router.post("/carts", status_code=201, response_model=CartMessage)
async def create_cart(manager: CartManager = Depends(get_carts)):
    cart = await manager.add_cart()
    return {"message": f"Cart {cart['id']} created", "cart": cart}


@router.get("/carts/{cid}", response_model=List[CartItem], responses=ERRORS)
async def view_cart(cid: int, manager: CartManager = Depends(get_carts)):
    return manager.get_products_in_cart(cid)


@router.post("/carts/{cid}/product/{pid}", response_model=CartMessage, responses=ERRORS)
async def add_to_cart(
    cid: int,
    pid: int,
    payload: Optional[AddToCartIn] = Body(None),
    products: ProductManager = Depends(get_products),
    carts: CartManager = Depends(get_carts),
):
    quantity = payload.quantity if payload is not None else 1
    carts.get_cart_by_id(cid)
    product = products.get_product_by_id(pid)
    cart = await carts.add_product_to_cart(cid, pid, quantity)
    return {"message": f"Added {quantity} x {product.get('title')} to cart {cid}", "cart": cart}


# ---------------------------
# Error handlers
# ---------------------------
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def validation_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def unhandled_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "internal server error"})


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    products = ProductManager(FileStore(settings.products_path))
    carts = CartManager(FileStore(settings.carts_path))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # requests are only served once both files are in memory
        await products.initialize()
        await carts.initialize()
        logger.info("jsonshop ready on %s:%s", settings.host, settings.port)
        yield

    app = FastAPI(title="jsonshop (JSON file store)", lifespan=lifespan)
    app.state.settings = settings
    app.state.products = products
    app.state.carts = carts

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(ValidationFailure, validation_handler)
    app.add_exception_handler(Exception, unhandled_handler)

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
