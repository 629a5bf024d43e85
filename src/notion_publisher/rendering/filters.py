"""Text formatting helpers used by the Markdown exporter."""

from schemas.notion import RichText


def format_rich_text(runs: list[RichText]) -> str:
    """Render rich text runs as inline Markdown.

    Args:
        runs: Rich text runs from a block or property

    Returns:
        Markdown with code, bold, italic, strikethrough and links applied

    Examples:
        >>> format_rich_text([RichText(plain_text="hi", href="https://x.y")])
        '[hi](https://x.y)'
    """
    parts: list[str] = []
    for run in runs:
        text = run.plain_text
        if not text:
            continue
        if run.type == "equation":
            parts.append(f"${text}$")
            continue

        annotations = run.annotations
        if annotations.code:
            text = f"`{text}`"
        if annotations.bold:
            text = f"**{text}**"
        if annotations.italic:
            text = f"_{text}_"
        if annotations.strikethrough:
            text = f"~~{text}~~"
        if run.href:
            text = f"[{text}]({run.href})"
        parts.append(text)
    return "".join(parts)


def plain_text(runs: list[RichText]) -> str:
    """Concatenate the plain text of rich text runs."""
    return "".join(run.plain_text for run in runs)


def indent(text: str, prefix: str) -> str:
    """Prefix every non-empty line of text."""
    return "\n".join(prefix + line if line else line for line in text.split("\n"))
