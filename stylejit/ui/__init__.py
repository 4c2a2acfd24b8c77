# stylejit/ui/__init__.py
from rich.console import Console
from rich.theme import Theme

# ─── Default colour scheme (TokyoNight-flavoured) ───────────────────────
STYLEJIT_THEME = Theme(
    {
        "primary": "bold #7aa2f7",  # Tokyonight blue
        "secondary": "#bb9af7",  # Tokyonight purple/magenta
        "success": "#9ece6a",  # Tokyonight green
        "warning": "bold #e0af68",  # Tokyonight yellow
        "error": "bold #f7768e",  # Tokyonight red
        "info": "dim #7dcfff",  # Tokyonight cyan
        "highlight": "bold #ff9e64",  # Tokyonight orange/peach
        "repr.number": "#e0af68",
        "repr.str": "#9ece6a",
    }
)

# Shared console instances; stdout for results, stderr for diagnostics
console = Console(theme=STYLEJIT_THEME, highlight=False)
err_console = Console(theme=STYLEJIT_THEME, stderr=True, highlight=False)


# ─── Helper Print Functions ─────────────────────────────────────────────
def print_primary(message: str, **kwargs) -> None:
    """Print a message in the primary brand color."""
    console.print(f"[primary]{message}[/primary]", **kwargs)


def print_info(message: str, **kwargs) -> None:
    """Print an informational message."""
    console.print(f"[info]{message}[/info]", **kwargs)


def print_success(message: str, **kwargs) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/success]", **kwargs)


def print_warning(message: str, **kwargs) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[warning]{message}[/warning]", **kwargs)


def print_error(message: str, **kwargs) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]{message}[/error]", **kwargs)


def print_highlight(message: str, **kwargs) -> None:
    """Print a highlighted message."""
    console.print(f"[highlight]{message}[/highlight]", **kwargs)


# Expose the theme for external usage
default_theme = STYLEJIT_THEME
