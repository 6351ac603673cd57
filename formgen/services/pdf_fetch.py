# formgen/services/pdf_fetch.py
import os, logging
from typing import Optional

import httpx

log = logging.getLogger("formgen")

PDF_FETCH_TIMEOUT = float(os.environ.get("PDF_FETCH_TIMEOUT", "30"))

class PdfFetchError(RuntimeError):
    pass

def fetch_pdf_bytes(url: str, *, timeout: float = PDF_FETCH_TIMEOUT,
                    transport: Optional[httpx.BaseTransport] = None) -> bytes:
    log.info(f"[fetch] GET {url}")
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as c:
            r = c.get(url)
    except httpx.HTTPError as e:
        log.error(f"[fetch] {url} failed: {type(e).__name__}: {e}")
        raise PdfFetchError(f"Failed to download PDF: {e}") from e

    if not r.is_success:
        # first 200 chars of the body tell why the source refused
        body = r.text[:200] if r.content else ""
        log.error(f"[fetch] {url} -> {r.status_code} body={body!r}")
        raise PdfFetchError(f"Failed to download PDF: {r.status_code} {r.reason_phrase}")

    log.info(f"[fetch] {url} -> {len(r.content)} bytes")
    return r.content
