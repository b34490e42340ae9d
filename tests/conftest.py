import time

import pytest
from unittest.mock import MagicMock

from gwsheets.sheets.catalog import SheetCatalog

SHEETS = [
    {"sheetId": 0, "title": "Sheet1", "index": 0, "sheetType": "GRID",
     "tabColorStyle": {"rgbColor": {"red": 1}}},
    {"sheetId": 1234, "title": "Data", "index": 1, "sheetType": "GRID"},
    {"sheetId": 99, "title": "My Sheet", "index": 2, "sheetType": "GRID",
     "tabColor": {"green": 1, "blue": 1}},
]

class FakeFetcher():
    """Stands in for ops.getSheets, counting how often the catalog asks"""
    def __init__(self, sheets: list[dict], delay: float = 0) -> None:
        self.sheets = sheets
        self.delay = delay
        self.calls = 0

    def __call__(self, spreadsheet_id: str) -> list[dict]:
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return list(self.sheets)

@pytest.fixture
def fetcher():
    return FakeFetcher(SHEETS)

@pytest.fixture
def catalog(fetcher):
    return SheetCatalog("ssid", fetcher)

@pytest.fixture
def service():
    """MagicMock standing in for a built sheets v4 service"""
    s = MagicMock()
    spreadsheets = s.spreadsheets.return_value
    spreadsheets.get.return_value.execute.return_value = {
        "spreadsheetId": "ssid",
        "sheets": [{"properties": dict(p)} for p in SHEETS],
    }
    spreadsheets.batchUpdate.return_value.execute.return_value = {
        "spreadsheetId": "ssid", "replies": [{}],
    }
    values = spreadsheets.values.return_value
    values.batchGet.return_value.execute.return_value = {
        "spreadsheetId": "ssid",
        "valueRanges": [{"range": "Sheet1!A1:B2", "majorDimension": "ROWS",
                         "values": [["a", "b"], ["1", "2"]]}],
    }
    values.batchUpdate.return_value.execute.return_value = {
        "spreadsheetId": "ssid", "totalUpdatedRows": 2, "totalUpdatedColumns": 2,
        "totalUpdatedCells": 4, "totalUpdatedSheets": 1,
        "responses": [{"spreadsheetId": "ssid", "updatedRange": "Sheet1!A1:B2", "updatedCells": 4}],
    }
    values.batchClear.return_value.execute.return_value = {
        "spreadsheetId": "ssid", "clearedRanges": ["Sheet1!A1:ZZ1000"],
    }
    return s
