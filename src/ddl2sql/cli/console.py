from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

ddl_theme = Theme({
    "table.name": "bold magenta",
    "key": "cyan",
    "reference": "green",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
})

console = Console(theme=ddl_theme)

def print_warning(message: str) -> None:
    console.print(f"[warning]! {escape(message)}[/warning]", soft_wrap=True)

def print_success(message: str) -> None:
    console.print(f"[success]✔ {escape(message)}[/success]", soft_wrap=True)

def print_error(message: str) -> None:
    console.print(f"[error]✘ {escape(message)}[/error]", soft_wrap=True)
