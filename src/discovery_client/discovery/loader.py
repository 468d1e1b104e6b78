"""Load discovery documents from a URL, local file, or stdin.

This module handles the I/O needed to obtain raw discovery document text.
Parsing and model construction are left to
:func:`~discovery_client.discovery.builder.create_service`; the
:func:`load_service` shortcut chains the two.

Fetched documents are not cached.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import httpx

from discovery_client.discovery.builder import create_service
from discovery_client.exceptions import DocumentLoadError
from discovery_client.models import DiscoveryVersion, FactoryParameters, Service

logger = logging.getLogger(__name__)


def load_document(source: str, timeout: float = 30.0) -> str:
    """Load discovery document text from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Timeout in seconds for URL fetches.

    Returns:
        The document text.

    Raises:
        DocumentLoadError: If the source cannot be read or is empty.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


def load_service(
    source: str,
    version: Union[DiscoveryVersion, str],
    params: Optional[FactoryParameters] = None,
    timeout: float = 30.0,
) -> Service:
    """Load a discovery document and build its :class:`~discovery_client.models.Service`.

    Raises:
        DocumentLoadError: If the source cannot be read.
        JsonSyntaxError: If the document is not valid JSON.
        DiscoveryDocumentError: If the document cannot be mapped to a service.
    """
    text = load_document(source, timeout=timeout)
    return create_service(text, version, params)


def _load_from_stdin() -> str:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")
    return content


def _load_from_url(url: str, timeout: float) -> str:
    """Fetch a document over HTTP(S), following redirects."""
    logger.debug("Fetching discovery document from %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching discovery document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch discovery document from {url}: {exc}") from exc

    if not response.text.strip():
        raise DocumentLoadError(f"Empty discovery document at {url}")
    return response.text


def _load_from_file(path: str) -> str:
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Discovery document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read discovery document {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Discovery document is empty: {path}")
    return content
