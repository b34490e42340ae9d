import pytest

from gwsheets.sheets.requests import *
from gwsheets.sheets.resources import *
from gwsheets.sheets.resources import from_response

def test_update_sheet_properties():
    request = UpdateSheetPropertiesRequest(SheetProperties(sheetId=5, title="New"), "title")
    assert(request.to_request() == {
        "updateSheetProperties": {"properties": {"sheetId": 5, "title": "New"}, "fields": "title"}
    })

def test_clear_basic_filter():
    assert(ClearBasicFilterRequest(3).to_request() == {"clearBasicFilter": {"sheetId": 3}})

def test_repeat_cell():
    request = RepeatCellRequest(GridRange(0, 0, 2, 0, 1),
                                CellData(CellFormat(NumberFormat("number", "0.00"))),
                                "userEnteredFormat.numberFormat")
    assert(request.to_request() == {
        "repeatCell": {
            "range": {"sheetId": 0, "startRowIndex": 0, "endRowIndex": 2,
                      "startColumnIndex": 0, "endColumnIndex": 1},
            "cell": {"userEnteredFormat": {"numberFormat": {"type": "NUMBER", "pattern": "0.00"}}},
            "fields": "userEnteredFormat.numberFormat",
        }
    })

def test_set_basic_filter_from_dicts():
    request = SetBasicFilterRequest({"range": {"sheetId": 2},
                                     "criteria": {"0": {"condition": {"type": "TEXT_EQ",
                                                                      "values": [{"userEnteredValue": "a"}]}}}})
    assert(request.filter.criteria[0].values == ["a"])
    assert(request.to_request()["setBasicFilter"]["filter"]["criteria"]["0"]["condition"]["type"] == "TEXT_EQ")

def test_update_request_body():
    body = GoogleSheetsUpdateRequest([ClearBasicFilterRequest(1), {"raw": {}}]).to_base()
    assert(body == {"requests": [{"clearBasicFilter": {"sheetId": 1}}, {"raw": {}}],
                    "includeSpreadsheetInResponse": False,
                    "responseRanges": [],
                    "responseIncludeGridData": False})

def test_bad_request_class_name():
    class Bogus(GoogleSheetsUpdateRequestBase):
        pass
    with pytest.raises(RuntimeError):
        Bogus().to_request()

def test_number_format_validation():
    assert(NumberFormat("percent").type == "PERCENT")
    with pytest.raises(ValueError):
        NumberFormat("money")

def test_resources_ignore_unknown_fields():
    props = from_response(SheetProperties, {"sheetId": 1, "title": "x", "index": 0,
                                            "sheetType": "GRID", "dataSourceSheetProperties": {}})
    assert(props)
    assert(str(props) == "x(1[0])")
    spreadsheet = Spreadsheet(spreadsheetId="ssid", properties={"title": "Book", "autoRecalc": "ON_CHANGE"},
                              sheets=[{"properties": {"sheetId": 0, "title": "Sheet1", "index": 0}, "charts": []}])
    assert(spreadsheet.properties.title == "Book")
    assert(spreadsheet.sheets[0].properties.sheetId == 0)
    assert(str(spreadsheet) == "Book[Sheet1(0[0])]")

def test_responses():
    response = GoogleSheetsUpdateRequestResponse(spreadsheetId="ssid",
                                                 updatedSpreadsheet={"spreadsheetId": "ssid"})
    assert(response)
    assert(isinstance(response.updatedSpreadsheet, Spreadsheet))
    values = GetValuesRequestResponse("ssid", [{"range": "A1", "majorDimension": "COLUMNS", "values": [["x"]]}])
    assert(values.valueRanges[0])
    assert(values.valueRanges[0].majorDimension == "COLUMNS")
    assert(not UpdateValuesRequestResponse())

def test_unset_fields_dropped_blank_cells_kept():
    assert(ValueRange("A1").to_base() == {"range": "A1", "majorDimension": "", "values": []})
    assert(GridRange(0, 0, 1).to_base() == {"sheetId": 0, "startRowIndex": 0, "endRowIndex": 1})
    body = ValueRange("A1", "ROWS", [["x", None, "y"], [None, 2]]).to_base()
    assert(body["values"] == [["x", None, "y"], [None, 2]])

def test_enum():
    assert(GoogleSheetsEnum.dimension("cols") == "COLUMNS")
    assert(GoogleSheetsEnum.valueRenderOption("formula") == "FORMULA")
    assert(GoogleSheetsEnum.valueInputOption("user") == "USER_ENTERED")
    assert(GoogleSheetsEnum.dateTimeRenderOption("bogus") == "")
