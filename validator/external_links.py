"""
validator/external_links.py — sprawdzanie dostępności linków http(s).

Wynik trafia do ostrzeżeń raportu, nie do błędów: dostępność zewnętrznej
strony nie zależy od autora dokumentacji.
"""

from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": "docweave-link-check/0.1"}


def probe_url(url: str, timeout: float = 10.0, session: requests.Session | None = None) -> str | None:
    """
    Zwraca None gdy URL odpowiada (< 400), inaczej opis problemu.
    Serwery odrzucające HEAD (405/501) sprawdzamy GET-em.
    """
    http = session or requests
    try:
        resp = http.head(url, timeout=timeout, headers=_HEADERS, allow_redirects=True)
        if resp.status_code in (405, 501):
            resp = http.get(url, timeout=timeout, headers=_HEADERS, stream=True)
            resp.close()
    except requests.RequestException as exc:
        logger.debug("Błąd połączenia %s: %s", url, exc)
        return f"błąd połączenia: {exc.__class__.__name__}"

    if resp.status_code >= 400:
        return f"HTTP {resp.status_code}"
    return None


def check_external_links(
    links: list[tuple[str, int, str]],
    timeout: float = 10.0,
) -> list[str]:
    """
    links: [(dokument, linia, url)] — każdy URL sprawdzany raz.
    Zwraca ostrzeżenia w postaci "dokument:linia: url — problem".
    """
    warnings: list[str] = []
    results: dict[str, str | None] = {}

    with requests.Session() as session:
        for doc, line, url in links:
            if url not in results:
                results[url] = probe_url(url, timeout, session)
            problem = results[url]
            if problem is not None:
                warnings.append(f"{doc}:{line}: {url} — {problem}")

    return warnings
