"""Locale Lister — codes come back in service order; failures propagate."""

import pytest

from localesync.services.locale_lister import list_locales

from tests.services.fake_query_engine import FakeLocaleService, FakeStoreError


async def test_returns_codes_in_service_order():
    assert await list_locales(FakeLocaleService(["fr", "pt", "en"])) == ["fr", "pt", "en"]


async def test_no_locales_configured():
    assert await list_locales(FakeLocaleService([])) == []


async def test_service_failure_propagates():
    with pytest.raises(FakeStoreError):
        await list_locales(FakeLocaleService(["pt"], fail=True))


async def test_reads_sql_locale_table(sql_locales):
    assert await list_locales(sql_locales) == ["pt", "en", "fr"]
