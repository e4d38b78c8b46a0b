"""
Flask integration.

``init_app`` installs an after_request hook that moves the script tags
buffered by ScriptTransport into the outgoing HTML page, so values logged
while handling a request show up in that page's browser console.
"""

from typing import Optional

from flask import Flask, Response, current_app, has_app_context

from .console import ConsoleLogger, get_console_logger
from .transport import ScriptTransport

EXTENSION_KEY = "console_logger"


def inject_scripts(html: str, scripts) -> str:
    """Insert script tags before the closing body tag (or append them)."""
    block = "\n".join(scripts)
    marker = html.lower().rfind("</body>")
    if marker == -1:
        return html + block
    return html[:marker] + block + html[marker:]


def init_app(app: Flask, console: Optional[ConsoleLogger] = None) -> ConsoleLogger:
    """
    Register console logging on a Flask app.

    Args:
        app: Flask application
        console: Console logger to drain (defaults to the global one)

    Returns:
        The console logger in use
    """
    console = console or get_console_logger()
    app.extensions[EXTENSION_KEY] = console

    @app.after_request
    def inject_console_logs(response: Response):
        transport = console.transport
        if not isinstance(transport, ScriptTransport):
            return response

        scripts = transport.drain()
        if not scripts:
            return response

        # Streams and non-HTML bodies cannot take inline scripts
        if response.mimetype != "text/html" or response.is_streamed or response.direct_passthrough:
            return response

        response.set_data(inject_scripts(response.get_data(as_text=True), scripts))
        return response

    return console


def current_console() -> ConsoleLogger:
    """Console logger registered on the current app, else the global one."""
    if has_app_context() and EXTENSION_KEY in current_app.extensions:
        return current_app.extensions[EXTENSION_KEY]
    return get_console_logger()
