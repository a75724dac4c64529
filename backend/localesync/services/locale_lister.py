"""Locale Lister — reads the configured locale codes from the locale service."""

from localesync.core.repository_protocols import LocaleService


async def list_locales(locale_service: LocaleService) -> list[str]:
    """Return configured locale codes in service order. Errors propagate."""
    return [entry["code"] for entry in await locale_service.find()]
