"""Line-oriented CSV tokenizing.

Spreadsheet exports handled here are simple enough that a quote toggles
"inside a field" and is otherwise dropped. Escaped quotes ("") are not
supported, and a quoted field cannot span lines.
"""

from pathlib import Path


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    Examples:
        >>> tokenize_line('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> tokenize_line('a,,b')
        ['a', '', 'b']
        >>> tokenize_line('a,"b')
        ['a', 'b']

    Args:
        line: A single line of text (no trailing newline)

    Returns:
        List of field values
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> list[str]:
    """Split file content into non-blank lines.

    Carriage returns are stripped so Windows exports behave like Unix ones.
    """
    lines = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if line.strip():
            lines.append(line)
    return lines


def tokenize_text(text: str) -> list[list[str]]:
    """Tokenize every non-blank line of a CSV document."""
    return [tokenize_line(line) for line in split_lines(text)]


def read_csv_file(csv_file_path: str) -> str:
    """Read a CSV file as text, dropping any UTF-8 byte order mark.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
    return csv_path.read_text(encoding="utf-8-sig")
