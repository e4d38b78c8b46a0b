#!/usr/bin/env python3
"""
Flask server for the browser console logger.
Serves the settings page and API, plus a demo page that logs request data
to the browser console when enabled and opened with ?console_logger.
"""

import os
from flask import Flask, request, jsonify, redirect, render_template_string, url_for
from flask_cors import CORS
from dotenv import load_dotenv
from console_logger import (
    ConsoleLogger,
    PrettyLogger,
    RequestGate,
    ScriptTransport,
    SettingsStore,
    current_console,
    init_app,
)
from console_logger.settings import parse_flag

# Load environment variables
load_dotenv()

SETTINGS_PAGE = """<!doctype html>
<html>
<head><title>Console Logger Settings</title></head>
<body>
<div class="wrap">
    <h1>Console Logger Settings</h1>
    {% if env_override is not none %}
    <p><strong>Note:</strong> CONSOLE_LOGGER_ENABLED is set in the environment and overrides this setting.</p>
    {% endif %}
    <form method="post" action="{{ url_for('settings_page') }}">
        <label for="enabled">
            <input type="checkbox" id="enabled" name="enabled" value="1" {% if stored %}checked{% endif %} />
            Enable debug console logging
        </label>
        <p>Append <code>?{{ query_param }}</code> to a page URL to see its logs in the browser console.</p>
        <button type="submit">Save Changes</button>
    </form>
</div>
</body>
</html>
"""

DEMO_PAGE = """<!doctype html>
<html>
<head><title>Console Logger</title></head>
<body>
<h1>Console Logger</h1>
<p>Logging is {{ "on" if enabled else "off" }}. Open the developer console to see logged values.</p>
</body>
</html>
"""


def create_app(settings: SettingsStore | None = None, log_dir: str = "logs") -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Settings store (defaults to one configured from the environment)
        log_dir: Directory for the settings audit log

    Returns:
        Configured Flask application
    """
    settings = settings or SettingsStore()
    logger = PrettyLogger(log_dir=log_dir, filename="server.log")

    app = Flask(__name__)
    app.config["CONSOLE_LOGGER_SETTINGS"] = settings

    # Enable CORS for the settings API (permissive for development)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    console = ConsoleLogger(gate=RequestGate(settings), transport=ScriptTransport())
    init_app(app, console)

    def settings_payload() -> dict:
        return {
            "enabled": settings.is_enabled(),
            "stored": settings.stored_enabled(),
            "env_override": settings.env_override(),
            "query_param": settings.query_param(),
        }

    @app.errorhandler(ValueError)
    def settings_error(e):
        print(f"Error reading console logger settings: {e}")
        return jsonify({
            'error': str(e),
            'status': 'error'
        }), 500

    @app.route('/')
    def index():
        """Demo page. Logs the incoming request when console logging is on."""
        console_log = current_console().maybe_console_log
        console_log("request", {
            "method": request.method,
            "path": request.path,
            "args": request.args.to_dict(flat=False),
            "headers": dict(request.headers),
        })
        console_log("settings", settings_payload())
        return render_template_string(DEMO_PAGE, enabled=settings.is_enabled())

    @app.route('/console-logger/settings', methods=['GET', 'POST'])
    def settings_page():
        """HTML settings page with a single enable checkbox."""
        if request.method == 'POST':
            enabled = request.form.get('enabled') == '1'
            settings.set_enabled(enabled)
            logger.log("SETTINGS_UPDATE", {"enabled": enabled, "source": "settings_page"})
            print(f"Console logging {'enabled' if enabled else 'disabled'} from settings page")
            return redirect(url_for('settings_page'))

        return render_template_string(
            SETTINGS_PAGE,
            stored=settings.stored_enabled(),
            env_override=settings.env_override(),
            query_param=settings.query_param(),
        )

    @app.route('/api/console-logger/settings', methods=['GET'])
    def get_settings():
        """Current settings as JSON."""
        return jsonify(settings_payload()), 200

    @app.route('/api/console-logger/settings', methods=['POST'])
    def update_settings():
        """
        Update the enable flag.

        Expects JSON:
        {
            "enabled": bool | "1" | "0"
        }
        """
        data = request.get_json(silent=True)

        if not data or 'enabled' not in data:
            return jsonify({
                'error': "Expected JSON body with 'enabled'",
                'status': 'error'
            }), 400

        try:
            enabled = parse_flag(data['enabled'])
        except ValueError as e:
            return jsonify({
                'error': str(e),
                'status': 'error'
            }), 400

        settings.set_enabled(enabled)
        logger.log("SETTINGS_UPDATE", {"enabled": enabled, "source": "api"})

        return jsonify({'status': 'ok', **settings_payload()}), 200

    @app.route('/api/test', methods=['GET', 'POST', 'OPTIONS'])
    def test():
        """Simple test endpoint to verify CORS is working."""
        print(f"Test endpoint hit with {request.method}")
        return jsonify({
            'status': 'ok',
            'method': request.method,
            'message': 'CORS is working'
        }), 200

    return app


if __name__ == '__main__':
    store = SettingsStore()
    if store.activate():
        print(f"Created settings file {store.path} (logging disabled)")

    port = int(os.environ.get("PORT", "5050"))
    print(f"Starting Flask server on http://localhost:{port}")
    print(f"Console logging enabled: {store.is_enabled()}")
    create_app(store).run(host='0.0.0.0', port=port, debug=True)
