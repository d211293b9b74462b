"""
HTTP client for the Etymograph API.
"""

import httpx

from etymograph.core.config import get_settings


def base_url() -> str:
    return get_settings().api_url


def get_graph(word: str, depth: int | None = None) -> dict:
    params = {"depth": depth} if depth is not None else {}
    r = httpx.get(f"{base_url()}/words/{word}", params=params, timeout=60)
    r.raise_for_status()
    return r.json()


def get_entry(word: str) -> dict:
    r = httpx.get(f"{base_url()}/words/{word}/entry")
    r.raise_for_status()
    return r.json()


def get_random() -> str:
    r = httpx.get(f"{base_url()}/random")
    r.raise_for_status()
    return r.json()["word"]
