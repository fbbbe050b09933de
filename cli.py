# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.shopclient import ShopClient

console = Console()
c = ShopClient(base_url=os.getenv("JSONSHOP_URL", "http://127.0.0.1:8080"))


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
cart_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Title", style="bold", width=20)
    table.add_column("Code", width=12)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Description", width=30)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("title", "N/A"),
            p.get("code", "N/A"),
            f"${float(p.get('price', 0)):.2f}",
            str(p.get("stock", 0)),
            p.get("description", "")
        )
    console.print(table)


def _title_for(product_id: int) -> Optional[str]:
    for p in product_cache:
        if p.get("id") == product_id:
            return p.get("title")
    return None


def show_cart(cart_id: int, entries: List[Dict[str, Any]]):
    title = Text()
    title.append("🛒 Cart ", style="bold")
    title.append(str(cart_id), style="bold cyan")

    if not entries:
        console.print(Panel("This cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product ID", style="dim", width=10)
    table.add_column("Title", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for it in entries:
        name = _title_for(it.get("id"))
        table.add_row(
            str(it.get("id", "?")),
            name if name else "[red]Unknown product[/red]",
            str(it.get("quantity", 0))
        )

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with spinner and error capture
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        detail = e
        response = getattr(e, "response", None)
        if response is not None:
            try:
                detail = response.json().get("detail", e)
            except ValueError:
                pass
        status_message = f"Error: {detail}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def get_cart_completer():
    return WordCompleter([str(cid) for cid in sorted(cart_cache)], ignore_case=True)


def refresh_products():
    global product_cache
    product_cache = try_api(c.list_products) or []


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ jsonshop",
        "[bold blue]Products & Carts CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_int(message: str, completer=None) -> Optional[int]:
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Please enter a numeric id.[/red]")
        return None


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_products()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "🆕 Create cart"),
            ("2", "ℹ️ Get product by ID", "7", "🛒 View cart"),
            ("3", "➕ Add product", "8", "➕ Add product to cart"),
            ("4", "✏️ Update product", "", ""),
            ("5", "🗑️ Delete product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            limit = IntPrompt.ask("How many (0 for all)", default=0)
            products = try_api(c.list_products, limit or None, success_msg="Products loaded successfully")
            if products is not None:
                show_products(products)

        elif choice == "2":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_products([resp])

        elif choice == "3":
            title = prompt_with_autocomplete("Title")
            description = prompt_with_autocomplete("Description")
            price = ask_float("💰 Price", default=10.0)
            thumbnail = prompt_with_autocomplete("Thumbnail", default="no-image.png")
            code = prompt_with_autocomplete("Code")
            stock = IntPrompt.ask("📦 Stock", default=1)
            resp = try_api(c.add_product, title, description, price, thumbnail, code, stock)
            if resp:
                status_message = resp["message"]
                show_products([resp["product"]])
                refresh_products()

        elif choice == "4":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is None:
                continue
            field = prompt_with_autocomplete(
                "Field to change",
                completer=WordCompleter(["title", "description", "price", "thumbnail", "code", "stock"]),
            ).strip()
            value: Any = prompt_with_autocomplete("New value")
            if field in ("price", "stock"):
                try:
                    value = float(value)
                except ValueError:
                    console.print("[red]Please enter a valid number.[/red]")
                    continue
            resp = try_api(c.update_product, pid, **{field: value})
            if resp:
                status_message = resp["message"]
                show_products([resp["product"]])
                refresh_products()

        elif choice == "5":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid)
                if resp:
                    status_message = resp["message"]
                    refresh_products()

        elif choice == "6":
            resp = try_api(c.create_cart)
            if resp:
                status_message = resp["message"]
                cart_cache.add(resp["cart"]["id"])

        elif choice == "7":
            cid = ask_int("Enter cart ID", completer=get_cart_completer())
            if cid is not None:
                entries = try_api(c.view_cart, cid, success_msg=f"Cart {cid} loaded")
                if entries is not None:
                    cart_cache.add(cid)
                    show_cart(cid, entries)

        elif choice == "8":
            cid = ask_int("Enter cart ID", completer=get_cart_completer())
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if cid is None or pid is None:
                continue
            qty = IntPrompt.ask("Enter quantity", default=1)
            resp = try_api(c.add_to_cart, cid, pid, qty)
            if resp:
                status_message = resp["message"]
                cart_cache.add(cid)
                show_cart(cid, resp["cart"]["products"])

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
