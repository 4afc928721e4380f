"""Build the client-visible relay responses."""

import json
import re

from bs4 import BeautifulSoup
from flask import Response

HTML_CONTENT_TYPE = "text/html; charset=utf-8"

_LINE_BREAKS = re.compile(r"[\r\n]+")


def build_shell_html(fetch_url: str, tags) -> str:
    """HTML page carrying the og:* tags that sends the browser on to ``fetch_url``."""
    doc = BeautifulSoup("<!doctype html><html><head></head><body></body></html>", "lxml")
    head = doc.head
    head.append(doc.new_tag("meta", attrs={"charset": "utf-8"}))
    for tag in tags:
        head.append(doc.new_tag("meta", attrs={"property": tag.property, "content": tag.content}))

    script_tag = doc.new_tag("script")
    script_tag.string = f"window.location.href = {json.dumps(fetch_url)};"
    doc.body.append(script_tag)

    # for clients without scripting
    link = doc.new_tag("a", href=fetch_url)
    link.string = fetch_url
    doc.body.append(link)
    return str(doc)


def _header_value(value: str) -> str:
    # WSGI carries header values as latin-1 strings; smuggle the UTF-8 bytes through
    folded = _LINE_BREAKS.sub(" ", value)
    return folded.encode("utf-8").decode("latin-1")


def build_redirect(fetch_url: str, tags) -> Response:
    resp = Response(status=307, headers={"Location": fetch_url})
    for tag in tags:
        resp.headers.add(tag.property, _header_value(tag.content))
    return resp


def relay_response(fetch_url: str, tags, mode: str) -> Response:
    if mode == "redirect":
        return build_redirect(fetch_url, tags)
    return Response(build_shell_html(fetch_url, tags), content_type=HTML_CONTENT_TYPE)
