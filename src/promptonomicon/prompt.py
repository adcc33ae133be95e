# Interactive terminal prompts for MCP server selection
import sys

from promptonomicon.mcp import CREDENTIAL_SERVERS, KNOWN_SERVERS

# ABOUTME: Terminal codes for interactive UI
CLEAR_SCREEN = "\033[2J\033[H"
BOLD = "\033[1m"
RESET = "\033[0m"
CYAN = "\033[96m"


def _numbered_select(items: list[str], selected: set[str], title: str) -> list[str]:
    """Line-based fallback for terminals without raw key input.

    ABOUTME: Used when termios is unavailable or stdin is not a TTY
    ABOUTME: Empty input or end-of-file keeps the preselected items
    """
    print(f"{BOLD}{title}{RESET}")
    print()
    for idx, item in enumerate(items):
        status = " [preselected]" if item in selected else ""
        print(f"  {idx + 1}. {item}{status}")

    print()
    print("Enter comma-separated numbers (e.g., 1,2) or press Enter for defaults:")
    user_input = sys.stdin.readline().strip()

    if user_input:
        chosen: set[str] = set()
        try:
            for num_str in user_input.split(","):
                idx = int(num_str.strip()) - 1
                if 0 <= idx < len(items):
                    chosen.add(items[idx])
        except ValueError:
            print("Invalid input. Using defaults.")
        else:
            selected = chosen

    return [item for item in items if item in selected]


def interactive_select(items: list[str], preselected: set[str], title: str) -> list[str]:
    """Terminal-based multi-select without external dependencies.

    ABOUTME: Uses arrow keys, space, and enter for selection
    ABOUTME: Falls back to a numbered list where termios is unavailable
    ABOUTME: or stdin is not a terminal (pipes, CI, /dev/null)
    ABOUTME: Returns selected items in their original order

    Args:
        items: List of items to select from
        preselected: Items that start selected
        title: Heading shown above the list

    Returns:
        List of selected items
    """
    if not items:
        return []

    selected: set[str] = set(preselected) & set(items)

    try:
        import termios
        import tty
    except ImportError:
        return _numbered_select(items, selected, title)

    if not sys.stdin.isatty():
        return _numbered_select(items, selected, title)

    current_idx = 0

    def getch() -> str:
        """Get a single character from stdin."""
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = sys.stdin.read(1)
            # Arrow keys arrive as three-character escape sequences
            if ch == "\x1b":
                ch += sys.stdin.read(2)
            return ch
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    while True:
        print(CLEAR_SCREEN, end="")
        print(f"{BOLD}{title}{RESET}")
        print()

        for idx, item in enumerate(items):
            prefix = "[x]" if item in selected else "[ ]"
            cursor = f"{CYAN}>>>{RESET} " if idx == current_idx else "    "
            description = KNOWN_SERVERS[item].description if item in KNOWN_SERVERS else None
            suffix = f" - {description}" if description else ""
            print(f"{cursor}{prefix} {item}{suffix}")

        print()
        print("Use arrow keys to navigate, space to toggle, enter to confirm.")

        try:
            ch = getch()
        except termios.error:
            print(CLEAR_SCREEN, end="")
            return _numbered_select(items, selected, title)

        if ch == "\x1b[A":  # Up arrow
            current_idx = (current_idx - 1) % len(items)
        elif ch == "\x1b[B":  # Down arrow
            current_idx = (current_idx + 1) % len(items)
        elif ch == " ":
            current_item = items[current_idx]
            if current_item in selected:
                selected.remove(current_item)
            else:
                selected.add(current_item)
        elif ch in ("\r", "\n"):
            break
        elif ch == "\x03":  # Ctrl+C
            print(CLEAR_SCREEN, end="")
            raise KeyboardInterrupt

    print(CLEAR_SCREEN, end="")
    return [item for item in items if item in selected]


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question on stdin; end-of-file means the default."""
    suffix = " [Y/n] " if default else " [y/N] "
    try:
        answer = input(question + suffix).strip().lower()
    except EOFError:
        print()
        return default
    if not answer:
        return default
    return answer in ("y", "yes")


def prompt_for_servers(available: list[str]) -> tuple[list[str], dict[str, bool]]:
    """Ask which MCP servers to configure, then confirm credentials.

    ABOUTME: Only the selection is interactive; filtering happens in
    ABOUTME: mcp.apply_credential_decision so it can be tested without a terminal
    """
    selection = interactive_select(
        available,
        preselected={name for name in available if name not in CREDENTIAL_SERVERS},
        title="Select MCP servers to configure for this project:",
    )

    confirmations: dict[str, bool] = {}
    for name in selection:
        var_name = CREDENTIAL_SERVERS.get(name)
        if var_name:
            confirmations[name] = confirm(
                f"{name} needs {var_name} set in your environment. Do you have a key?"
            )
    return selection, confirmations
