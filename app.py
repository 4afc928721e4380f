# app.py
import argparse
import logging
from dataclasses import replace
from urllib.parse import quote, urlsplit

from flask import Blueprint, Flask, Response, current_app, render_template, request

from seesaa_relay.compose import relay_response
from seesaa_relay.config import RELAY_MODES, ConfigError, RelayConfig
from seesaa_relay.errors import RelayError
from seesaa_relay.opengraph import fetch_open_graph
from seesaa_relay.rewrite import to_display_url, to_fetch_url

logger = logging.getLogger("seesaa_relay")
access_logger = logging.getLogger("seesaa_relay.access")

bp = Blueprint("relay", __name__)


def _relay_config() -> RelayConfig:
    return current_app.config["RELAY"]


def _raw_request_path(page):
    """
    The route path as it came over the wire, still percent escaped.
    Falls back to re-escaping the routed value when the server does not
    expose the request URI.
    """
    raw_uri = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if not raw_uri:
        return quote(page, safe="/").encode("ascii")
    if raw_uri.startswith("/"):
        path = raw_uri.split("?", 1)[0]
    else:
        path = urlsplit(raw_uri).path
    script_root = request.script_root
    if script_root and path.startswith(script_root):
        path = path[len(script_root):]
    # WSGI strings are latin-1 stand-ins for the raw bytes
    try:
        raw = path.encode("latin-1")
    except UnicodeEncodeError:
        raw = path.encode("utf-8")
    return raw.lstrip(b"/")


# --- Routes ---

@bp.route("/")
def index():
    input_url = request.args.get("url", "")
    if not input_url:
        return render_template("index.html")

    url = to_display_url(input_url, _relay_config())
    return render_template("index.html", InputUrl=input_url, Url=url)


@bp.route("/<path:page>")
def relay(page):
    config = _relay_config()
    fetch_url = to_fetch_url(_raw_request_path(page), config)
    tags = fetch_open_graph(fetch_url, config)
    logger.debug("%d og tags from %s", len(tags), fetch_url)
    return relay_response(fetch_url, tags, config.relay_mode)


@bp.app_errorhandler(RelayError)
def handle_relay_error(e):
    logger.warning("%s %s -> %d %s", request.method, request.path, e.status_code, e)
    return Response(str(e), status=e.status_code, content_type="text/plain; charset=utf-8")


@bp.after_app_request
def log_response(response):
    access_logger.info("%s - %s %s - %d", request.remote_addr, request.method, request.path, response.status_code)
    return response


def create_app(config=None):
    app = Flask(__name__)
    app.config["RELAY"] = config if config is not None else RelayConfig.from_env()
    app.register_blueprint(bp)
    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="seesaawiki relay with readable page URLs")
    parser.add_argument("--host", help="listen address (default from SEESAA_RELAY_LISTEN_HOST)")
    parser.add_argument("--port", type=int, help="listen port (default from SEESAA_RELAY_LISTEN_PORT)")
    parser.add_argument("--mode", choices=RELAY_MODES, help="relay response mode")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    overrides = {}
    if args.host:
        overrides["listen_host"] = args.host
    if args.port:
        overrides["listen_port"] = args.port
    if args.mode:
        overrides["relay_mode"] = args.mode
    try:
        config = replace(RelayConfig.from_env(), **overrides)
    except ConfigError as exc:
        raise SystemExit(f"configuration error: {exc}") from exc

    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app(config)
    logger.info("relaying %s as %s in %s mode", config.origin_host, config.relay_host, config.relay_mode)
    app.run(host=config.listen_host, port=config.listen_port, debug=False)


if __name__ == "__main__":
    main()
