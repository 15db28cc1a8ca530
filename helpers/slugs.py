"""URL slugs for scenarios."""

import re

_UNSAFE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, URL-safe, dash separated."""
    return _UNSAFE.sub("-", text.lower()).strip("-")


def scenario_slug(initial: float, monthly: float, annual_return: float, years: int) -> str:
    """Slug derived from parameters, e.g. ``invest-10000-monthly-500-7.5percent-20years``."""
    rate = round(annual_return, 1)
    rate_str = f"{rate:g}"
    return f"invest-{round(initial)}-monthly-{round(monthly)}-{rate_str}percent-{round(years)}years"
