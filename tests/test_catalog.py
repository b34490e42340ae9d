from concurrent.futures import ThreadPoolExecutor

import pytest

from gwsheets.sheets.catalog import SheetCatalog, SheetDescriptor
from gwsheets.sheets.errors import SheetNotFoundError
from gwsheets.sheets.resources import Color, SheetProperties

from conftest import FakeFetcher, SHEETS

def test_lazy_fetch_is_cached(catalog, fetcher):
    assert(not catalog.fetched)
    assert(fetcher.calls == 0)
    sheets = catalog.fetch()
    assert([s.title for s in sheets] == ["Sheet1", "Data", "My Sheet"])
    catalog.resolve_id("Data")
    catalog.resolve_title("#3")
    catalog.fetch()
    assert(len(catalog) == 3)
    assert(fetcher.calls == 1)

def test_refresh(catalog, fetcher):
    catalog.fetch()
    fetcher.sheets = [{"sheetId": 1234, "title": "Data", "index": 0},
                      {"sheetId": 0, "title": "Renamed", "index": 1}]
    # still the old snapshot until refresh
    assert(catalog.resolve_id("#1") == 0)
    sheets = catalog.refresh()
    assert(fetcher.calls == 2)
    assert(len(sheets) == 2)
    assert(catalog.resolve_id("#1") == 1234)
    assert(catalog.resolve_title(0) == "Renamed")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("Sheet1")

def test_resolve_id_ordinal(catalog):
    assert(catalog.resolve_id("#1") == 0)
    assert(catalog.resolve_id("#2") == 1234)
    assert(catalog.resolve_id("#3") == 99)
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("#5")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("#0")

def test_resolve_id_default(catalog):
    assert(catalog.resolve_id(None) == 0)
    assert(catalog.resolve_id("") == 0)

def test_resolve_id_int_unchecked(catalog, fetcher):
    assert(catalog.resolve_id(555) == 555)
    assert(catalog.resolve_id(0) == 0)
    # no lookup needed so nothing fetched
    assert(fetcher.calls == 0)

def test_resolve_id_title(catalog):
    assert(catalog.resolve_id("Data") == 1234)
    assert(catalog.resolve_id("My Sheet") == 99)
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("data")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("Nope")

def test_resolve_title(catalog):
    assert(catalog.resolve_title(None) == "Sheet1")
    assert(catalog.resolve_title("#2") == "Data")
    assert(catalog.resolve_title(99) == "My Sheet")
    assert(catalog.resolve_title("Data") == "Data")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_title(555)
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_title("#4")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_title("Nope")

def test_duplicate_titles_first_wins():
    catalog = SheetCatalog("ssid", FakeFetcher([{"sheetId": 7, "title": "Dup", "index": 0},
                                                {"sheetId": 8, "title": "Dup", "index": 1}]))
    assert(catalog.resolve_id("Dup") == 7)

def test_empty_spreadsheet():
    catalog = SheetCatalog("ssid", FakeFetcher([]))
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id(None)
    with pytest.raises(LookupError):
        catalog.resolve_title("#1")

def test_contains(catalog):
    assert("Data" in catalog)
    assert(99 in catalog)
    assert("Nope" not in catalog)
    assert(5 not in catalog)

def test_sheet_list(catalog):
    assert(catalog.sheet_list() == [
        {"id": 0, "title": "Sheet1", "color": "#ff0000"},
        {"id": 1234, "title": "Data"},
        {"id": 99, "title": "My Sheet", "color": "#00ffff"},
    ])

def test_descriptor_from_properties():
    d = SheetDescriptor.from_properties(SheetProperties(sheetId=3, title="x", index=4,
                                                        tabColor={"red": 0.5}))
    assert(d.id == 3)
    assert(d.title == "x")
    assert(d.index == 4)
    assert(d.color == Color(0.5, 0, 0))
    assert(d.hex_color == "#800000")
    # index falls back to the position in the response
    d = SheetDescriptor.from_properties({"sheetId": 3, "title": "x"}, 2)
    assert(d.index == 2)
    assert(d.hex_color is None)

def test_concurrent_first_fetch():
    fetcher = FakeFetcher(SHEETS, delay=0.05)
    catalog = SheetCatalog("ssid", fetcher)
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: catalog.resolve_id("#2"), range(16)))
    assert(ids == [1234] * 16)
    assert(fetcher.calls == 1)

def test_literal_title_skips_ordinals():
    catalog = SheetCatalog("ssid", FakeFetcher([{"sheetId": 10, "title": "Main", "index": 0},
                                                {"sheetId": 20, "title": "Other", "index": 1},
                                                {"sheetId": 30, "title": "#2", "index": 2}]))
    assert(catalog.resolve_id("#2") == 20)
    assert(catalog.resolve_id("#2", literal=True) == 30)
    assert(catalog.resolve_title("#2", literal=True) == "#2")
    with pytest.raises(SheetNotFoundError):
        catalog.resolve_id("#1", literal=True)
