"""Root landing page listing the API routes."""

from html import escape

_ROUTES = (
    ("GET", "/api/v1/link?roomName=&lt;identifier&gt;&amp;searchBy=token", "Resolve a room and return its call link"),
    ("GET", "/api/v1/rooms?search=&lt;term&gt;", "List rooms on the remote server"),
    ("GET", "/api/v1/test", "Test the remote connection"),
    ("GET", "/api/v1/settings", "Show settings (admin)"),
    ("POST", "/api/v1/settings", "Save settings (admin, file backend)"),
    ("GET", "/docs", "OpenAPI documentation"),
)


def render_root_page(app_name: str) -> str:
    """Return HTML for the root landing page."""
    rows = "\n".join(
        f"        <tr><td>{verb}</td><td><code>{path}</code></td><td>{label}</td></tr>"
        for verb, path, label in _ROUTES
    )
    title = escape(app_name)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{ font-family: system-ui, sans-serif; margin: 2rem auto; max-width: 720px; color: #222; }}
        h1 {{ font-weight: 600; }}
        table {{ border-collapse: collapse; width: 100%; }}
        td {{ border-bottom: 1px solid #ddd; padding: 0.4rem 0.6rem; font-size: 0.95rem; }}
        code {{ font-family: ui-monospace, monospace; font-size: 0.85rem; }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <p>Find a room on the remote Talk server, join it, and get a direct call link for the target server.</p>
    <table>
{rows}
    </table>
    <p>Run locally: <code>uv run uvicorn talklink.main:app --reload</code></p>
</body>
</html>
"""
