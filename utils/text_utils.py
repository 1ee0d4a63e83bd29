import html


def escape_html(text: str) -> str:
    return html.escape(text)


def truncate(text: str, max_len: int = 64) -> str:
    return text if len(text) <= max_len else text[:max_len - 1] + "…"


def bold(text: str) -> str:
    return f"<b>{escape_html(text)}</b>"
