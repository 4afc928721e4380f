"""Fetch an origin page and pull out its Open Graph metadata."""

import logging
from typing import NamedTuple

import requests
from bs4 import BeautifulSoup, ParserRejectedMarkup

from .errors import FetchError, ParseError
from .transcode import decode_legacy_lenient

logger = logging.getLogger(__name__)

OG_PREFIX = "og:"


class OpenGraphTag(NamedTuple):
    property: str
    content: str


def fetch_remote(url, config, session=None):
    headers = {"User-Agent": config.user_agent}
    getter = session.get if session is not None else requests.get
    logger.info("fetching %s", url)
    try:
        return getter(url, headers=headers, timeout=config.fetch_timeout)
    except requests.RequestException as e:
        raise FetchError(str(e)) from e


def parse_open_graph(body: bytes):
    """
    Return every og:* meta tag of ``body`` in document order, duplicates kept.

    seesaawiki serves metadata as EUC-JP whatever the page claims, so the
    document is read as latin-1 (one character per byte) and each content
    value is decoded from EUC-JP on its own. A value that does not decode
    drops that tag only; the rest of the page is still used.
    """
    try:
        soup = BeautifulSoup(body.decode("latin-1"), "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(str(e)) from e

    tags = []
    for meta in soup.select(f'meta[property^="{OG_PREFIX}"]'):
        prop = meta.get("property", "")
        content = decode_legacy_lenient(meta.get("content", ""))
        name = decode_legacy_lenient(prop)
        if content is None or name is None:
            logger.debug("skipping undecodable %r tag", prop)
            continue
        tags.append(OpenGraphTag(name, content))
    return tags


def fetch_open_graph(url, config, session=None):
    r = fetch_remote(url, config, session)
    try:
        if not 200 <= r.status_code < 300:
            raise FetchError(f"status code error: {r.status_code} {r.reason}")
        try:
            body = r.content
        except requests.RequestException as e:
            raise FetchError(str(e)) from e
    finally:
        r.close()
    return parse_open_graph(body)
