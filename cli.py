# cli.py
import argparse
import json
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from product_sdk.client import DEFAULT_BASE_URL, ProductAPIError, ProductClient

console = Console()

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
category_cache: Dict[str, List[str]] = {}

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(page: Dict[str, Any]):
    products = page.get("products", [])
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        caption=f"Page {page.get('currentPage', 1)} of {page.get('totalPages', 1)}"
                f" · {page.get('totalProducts', len(products))} product(s)",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=4)
    table.add_column("Name", style="bold", width=28)
    table.add_column("Category", width=24)
    table.add_column("Brand", width=14)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=6)
    table.add_column("Rating", justify="right", width=6)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"{p.get('category', 'N/A')} / {p.get('subCategory', 'N/A')}",
            p.get("brand", "N/A"),
            f"${p.get('price', 0):.2f}",
            str(p.get("stock", 0)),
            f"{p.get('rating', 0):.1f}",
        )
    console.print(table)


def show_product(p: Dict[str, Any]):
    if not p:
        console.print("[italic yellow]No product data[/italic yellow]")
        return

    specs = Table(box=box.SIMPLE, show_header=False)
    specs.add_column("Key", style="cyan")
    specs.add_column("Value")
    for key, value in (p.get("specifications") or {}).items():
        specs.add_row(key, str(value))

    body = Table.grid(padding=(0, 2))
    body.add_column(style="bold")
    body.add_column()
    body.add_row("Category", f"{p.get('category')} / {p.get('subCategory')}")
    body.add_row("Brand", str(p.get("brand")))
    body.add_row("Price", f"${p.get('price', 0):.2f}")
    body.add_row("Stock", str(p.get("stock")))
    body.add_row("Rating", f"{p.get('rating', 0):.1f} ({p.get('reviews', 0)} reviews)")
    body.add_row("Description", str(p.get("description")))
    if p.get("imageUrl"):
        body.add_row("Image", p["imageUrl"])
    if specs.row_count:
        body.add_row("Specs", specs)

    console.print(Panel(body, title=f"#{p.get('id')} {p.get('name')}", border_style="cyan"))


def show_categories(categories: Dict[str, List[str]]):
    if not categories:
        console.print("[italic yellow]No categories[/italic yellow]")
        return
    table = Table(title="🗂️ Categories", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", style="bold")
    table.add_column("Subcategories")
    for category, subs in categories.items():
        table.add_row(category, ", ".join(subs))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are shown in a status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except (ProductAPIError, OSError) as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer(client: ProductClient):
    global product_cache
    if not product_cache:
        page = try_api(client.list_products, limit=100) or {}
        product_cache = page.get("products", [])
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def get_category_completer(client: ProductClient):
    global category_cache
    if not category_cache:
        category_cache = try_api(client.list_categories) or {}
    words = set(category_cache)
    for subs in category_cache.values():
        words.update(subs)
    return WordCompleter(sorted(words), ignore_case=True)


def invalidate_caches():
    global product_cache, category_cache
    product_cache = []
    category_cache = {}


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id(client: ProductClient) -> Optional[int]:
    raw = prompt_with_autocomplete("Product ID:", get_product_completer(client)).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product ID must be a number.[/red]")
        return None


def create_header(client: ProductClient):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        f"[bold blue]{client.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
MENU_OPTIONS = [
    ("1", "📦 List products", "5", "✏️ Update product"),
    ("2", "🔍 Search / filter", "6", "🗑️ Delete product"),
    ("3", "ℹ️ Get product by ID", "7", "🗂️ Categories"),
    ("4", "➕ Create product", "8", "🔄 Reset store"),
    ("", "", "q", "👋 Quit"),
]


def menu(client: ProductClient):
    global status_message

    console.clear()
    console.print(create_header(client))

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in MENU_OPTIONS:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="Menu", border_style="cyan"))

        choice = Prompt.ask("Choose").strip().lower()

        if choice == "q":
            console.print("[bold]Bye 👋[/bold]")
            return

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            result = try_api(client.list_products, page=page)
            if result:
                show_products(result)

        elif choice == "2":
            completer = get_category_completer(client)
            filters = {
                "category": prompt_with_autocomplete("Category (blank for any):", completer).strip() or None,
                "subCategory": prompt_with_autocomplete("Subcategory (blank for any):", completer).strip() or None,
                "search": Prompt.ask("Search text", default="").strip() or None,
                "sort": Prompt.ask("Sort by", default="id"),
                "order": Prompt.ask("Order", choices=["asc", "desc"], default="asc"),
            }
            result = try_api(client.list_products, **filters)
            if result:
                show_products(result)

        elif choice == "3":
            pid = ask_product_id(client)
            if pid is not None:
                result = try_api(client.get_product, pid)
                if result:
                    show_product(result)

        elif choice == "4":
            completer = get_category_completer(client)
            result = try_api(
                client.create_product,
                name=Prompt.ask("Name"),
                category=prompt_with_autocomplete("Category:", completer).strip(),
                subCategory=prompt_with_autocomplete("Subcategory:", completer).strip(),
                price=ask_float("Price"),
                stock=IntPrompt.ask("Stock", default=0),
                brand=Prompt.ask("Brand"),
                description=Prompt.ask("Description"),
                imageUrl=Prompt.ask("Image URL", default="") or None,
                success_msg="Product created",
            )
            if result:
                invalidate_caches()
                show_product(result)

        elif choice == "5":
            pid = ask_product_id(client)
            if pid is not None:
                field = Prompt.ask("Field", choices=["name", "price", "stock", "brand", "description"])
                value: Any = ask_float("New value") if field == "price" else Prompt.ask("New value")
                if field == "stock":
                    value = int(value)
                result = try_api(client.update_product, pid, success_msg="Product updated", **{field: value})
                if result:
                    invalidate_caches()
                    show_product(result)

        elif choice == "6":
            pid = ask_product_id(client)
            if pid is not None and Confirm.ask(f"Delete product {pid}?"):
                try_api(client.delete_product, pid, success_msg=f"Product {pid} deleted")
                invalidate_caches()

        elif choice == "7":
            result = try_api(client.list_categories)
            if result:
                show_categories(result)

        elif choice == "8":
            if Confirm.ask("Restore the default products?"):
                try_api(client.reset, success_msg="Store reset")
                invalidate_caches()

        else:
            console.print(show_status(f"Unknown option: {choice}", False))


# ---------------------------
# Non-interactive commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)
    lp.add_argument("--category")
    lp.add_argument("--sub-category", dest="subCategory")
    lp.add_argument("--min-price", dest="minPrice", type=float)
    lp.add_argument("--max-price", dest="maxPrice", type=float)
    lp.add_argument("--search")
    lp.add_argument("--sort")
    lp.add_argument("--order", choices=["asc", "desc"])

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id", type=int)

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--sub-category", dest="subCategory", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--stock", type=int, required=True)
    cp.add_argument("--brand", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--image-url", dest="imageUrl")
    cp.add_argument("--specs", dest="specifications", type=json.loads, help="JSON object of specifications")

    up = subparsers.add_parser("update", help="Update a product")
    up.add_argument("product_id", type=int)
    up.add_argument("--name")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)
    up.add_argument("--brand")
    up.add_argument("--description")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id", type=int)

    subparsers.add_parser("categories", help="List categories and subcategories")
    subparsers.add_parser("reset", help="Restore the default products")
    subparsers.add_parser("menu", help="Interactive menu")
    return parser


def run_command(args: argparse.Namespace, client: ProductClient) -> int:
    options = {k: v for k, v in vars(args).items() if k not in ("command", "base_url", "product_id") and v is not None}
    try:
        if args.command == "list":
            show_products(client.list_products(**options))
        elif args.command == "get":
            show_product(client.get_product(args.product_id))
        elif args.command == "create":
            show_product(client.create_product(**options))
        elif args.command == "update":
            show_product(client.update_product(args.product_id, **options))
        elif args.command == "delete":
            client.delete_product(args.product_id)
            console.print(show_status(f"Product {args.product_id} deleted"))
        elif args.command == "categories":
            show_categories(client.list_categories())
        elif args.command == "reset":
            result = client.reset()
            console.print(show_status(f"Store reset, {result['totalProducts']} products"))
        elif args.command == "menu":
            menu(client)
    except ProductAPIError as e:
        console.print(show_status(f"Error: {e}", False))
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return run_command(args, ProductClient(base_url=args.base_url))


if __name__ == "__main__":
    sys.exit(main())
