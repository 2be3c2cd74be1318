# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from app.core import parse_subtotal
from app.errors import InvalidInput
from sdk.protection import ProtectionClient

console = Console()
c = ProtectionClient(base_url=os.getenv("PROTECTION_URL", "http://127.0.0.1:3000"))

status_message = "Ready"
SAMPLE_SUBTOTALS = [0, 25, 99.99, 100, 150, 250, 500, 1000]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_quote(subtotal: float, quote: Dict[str, Any]):
    console.print(Panel.fit(
        f"Subtotal: [bold]${subtotal:.2f}[/bold]\n"
        f"Protection price: [bold green]${quote.get('price', 0):.2f}[/bold green]",
        title="💲 Quote",
        border_style="cyan"
    ))


def show_update(subtotal: float, resp: Dict[str, Any]):
    console.print(Panel.fit(
        f"Subtotal: [bold]${subtotal:.2f}[/bold]\n"
        f"Committed price: [bold green]${resp.get('price', 0):.2f}[/bold green]",
        title="✅ Shopify variant updated",
        border_style="green"
    ))


def show_price_table(rows: List[Dict[str, Any]]):
    table = Table(
        title="📈 Protection price by subtotal",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
    )
    table.add_column("Subtotal", justify="right", width=12)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Rule", width=14)
    for row in rows:
        rule = "fixed" if row["subtotal"] < 100 else "3% + $0.01"
        table.add_row(f"${row['subtotal']:.2f}", f"${row['price']:.2f}", rule)
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
    Errors are shown and recorded in status_message; None is returned.
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
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛡️ Protection",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_subtotal(message: str, default: float = 50.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return parse_subtotal(raw)
        except InvalidInput:
            console.print("[red]Please enter a non-negative number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "🩺 Health check"),
            ("2", "💲 Quote protection price"),
            ("3", "🔄 Update Shopify price"),
            ("4", "📈 Price table"),
            ("q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            resp = try_api(c.health, success_msg="Service is up")
            if resp is not None:
                console.print(resp)

        elif choice == "2":
            subtotal = ask_subtotal("🧾 Order subtotal")
            resp = try_api(c.quote, subtotal, success_msg=f"Quote for ${subtotal:.2f} loaded")
            if resp:
                show_quote(subtotal, resp)

        elif choice == "3":
            subtotal = ask_subtotal("🧾 Order subtotal")
            if Confirm.ask(f"Push the protection price for ${subtotal:.2f} to Shopify?"):
                resp = try_api(c.update, subtotal, success_msg="Shopify price updated")
                if resp:
                    show_update(subtotal, resp)

        elif choice == "4":
            rows = []
            for s in SAMPLE_SUBTOTALS:
                resp = try_api(c.quote, s)
                if resp is None:
                    break
                rows.append({"subtotal": s, "price": resp["price"]})
            if rows:
                show_price_table(rows)

        elif choice.lower() in ("q", "quit", "exit"):
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
