# file: numan/utils/cli_printing.py
# Shared printing utilities for the numan CLI
# Provides consistent UI components: headers, status messages, tables


# =================== ANSI Color Codes ===================

class Colors:
    """ANSI color codes for terminal styling"""
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    GREY = '\033[90m'

    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'

    BOLD = '\033[1m'
    DIM = '\033[2m'

    RESET = '\033[0m'


# =================== Header Functions ===================

def print_box_header(title: str, icon: str = "ℹ", width: int = 76):
    """Print a minimal styled header"""
    print()
    print(f"{Colors.BOLD}{icon} {title}{Colors.RESET}")
    print(f"{Colors.DIM}{'─' * width}{Colors.RESET}")


def print_box_footer(width: int = 76):
    """Print a minimal footer"""
    print()


# =================== Status Messages ===================

def print_status(message: str, status: str = "info"):
    """Print a minimal status message with icon and color"""
    status_config = {
        'success': {'icon': '✓', 'color': Colors.GREEN},
        'error': {'icon': '✗', 'color': Colors.RED},
        'warning': {'icon': '⚠', 'color': Colors.YELLOW},
        'info': {'icon': 'ℹ', 'color': Colors.BLUE},
        'configure': {'icon': '🔧', 'color': Colors.YELLOW},
        'update': {'icon': '🔄', 'color': Colors.MAGENTA},
    }

    config = status_config.get(status, {'icon': '•', 'color': ''})

    print(f"{config['color']}{config['icon']}{Colors.RESET} {message}", flush=True)


# =================== Table Printing ===================

def print_table_header(columns: list, widths: list):
    """Print a table header with columns"""
    header_parts = []
    for (name, _), width in zip(columns, widths):
        header_parts.append(f"{Colors.BOLD}{Colors.BRIGHT_WHITE}{name:<{width}}{Colors.RESET}")

    print(f"  {' │ '.join(header_parts)}")

    sep_parts = [f"{Colors.BRIGHT_CYAN}{'─' * w}{Colors.RESET}" for w in widths]
    print(f"  {f'{Colors.BRIGHT_CYAN}─┼─{Colors.RESET}'.join(sep_parts)}")


def print_table_row(values: list, widths: list, styles: list = None):
    """Print a table row"""
    if styles is None:
        styles = [""] * len(values)

    color_map = {
        'grey': Colors.GREY,
        'white': Colors.WHITE,
        'green': Colors.BRIGHT_GREEN,
        'yellow': Colors.BRIGHT_YELLOW,
        'cyan': Colors.BRIGHT_CYAN,
        'blue': Colors.BRIGHT_BLUE,
        'red': Colors.BRIGHT_RED,
    }

    row_parts = []
    for value, width, style in zip(values, widths, styles):
        color = color_map.get(style.lower(), '')
        if color:
            padding = max(width - len(value), 0)
            row_parts.append(f"{color}{value}{Colors.RESET}" + " " * padding)
        else:
            row_parts.append(f"{value:<{width}}")

    print(f"  {f' {Colors.DIM}│{Colors.RESET} '.join(row_parts)}")
