"""Log formatting utilities."""

from typing import Any

from rich.markup import escape


def format_log_data(data: Any, max_length: int = 120, max_items: int = 3) -> str:
    """Compact preview of a value for log lines.

    Style texts and markup can be large; only a prefix and the length are
    shown. Collections show at most `max_items` entries. The result is
    escaped for Rich markup since CSS selectors contain brackets.

    Example:
        >>> format_log_data(["a{}", "b{}", "c{}", "d{}"])
        "['a{}', 'b{}', 'c{}', ... +1 more]"
    """
    return escape(_preview(data, max_length, max_items))


def _preview(data: Any, max_length: int, max_items: int) -> str:
    if data is None:
        return "None"

    if isinstance(data, str):
        if len(data) > 40:
            return f"'{data[:40]}...' (len={len(data)})"
        return f"'{data}'"

    if isinstance(data, dict):
        items = []
        for i, (k, v) in enumerate(data.items()):
            if i >= max_items:
                items.append(f"... +{len(data) - max_items} more")
                break
            items.append(f"{k}={_preview(v, max_length, max_items)}")
        result = "{" + ", ".join(items) + "}"

    elif isinstance(data, (list, tuple)):
        items = []
        for i, item in enumerate(data):
            if i >= max_items:
                items.append(f"... +{len(data) - max_items} more")
                break
            items.append(_preview(item, max_length, max_items))
        bracket = "[]" if isinstance(data, list) else "()"
        result = bracket[0] + ", ".join(items) + bracket[1]

    elif isinstance(data, bytes):
        result = f"<bytes len={len(data)}>"

    else:
        result = str(data)

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
