"""HTML escaping for untrusted comment text."""

# Order matters: "&" must be replaced first so entities produced by the
# later replacements are not escaped a second time.
_HTML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def sanitize_input(text: str) -> str:
    """Trim surrounding whitespace and escape HTML-significant characters."""
    result = text.strip()
    for char, entity in _HTML_REPLACEMENTS:
        result = result.replace(char, entity)
    return result
