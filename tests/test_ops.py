import pytest

from gwsheets.sheets import ops
from gwsheets.sheets.resources import SheetProperties, ValueRange

def test_get_sheets(service):
    sheets = ops.getSheets(service, "ssid")
    assert([s.title for s in sheets] == ["Sheet1", "Data", "My Sheet"])
    assert(all(isinstance(s, SheetProperties) for s in sheets))
    service.spreadsheets.return_value.get.assert_called_once_with(
        spreadsheetId="ssid", ranges=[], includeGridData=False,
        fields="spreadsheetId,sheets.properties")

def test_get_needs_id(service):
    with pytest.raises(ValueError):
        ops.get(service, "")

def test_get_values(service):
    response = ops.getValues(service, "ssid", "Sheet1!A1:B2", num_retries=3)
    assert(response.valueRanges[0].values == [["a", "b"], ["1", "2"]])
    values = service.spreadsheets.return_value.values.return_value
    values.batchGet.assert_called_once_with(spreadsheetId="ssid", ranges=["Sheet1!A1:B2"],
                                            majorDimension="ROWS",
                                            valueRenderOption="FORMATTED_VALUE",
                                            dateTimeRenderOption="SERIAL_NUMBER")
    values.batchGet.return_value.execute.assert_called_once_with(num_retries=3)

@pytest.mark.parametrize("kwargs", [{"dimension": "DIAGONAL"},
                                    {"valueRenderOption": "PRETTY"},
                                    {"valueRenderOption": "UNFORMATTED", "dateTimeRenderOption": "NOPE"}])
def test_get_values_bad_options(service, kwargs):
    with pytest.raises(ValueError):
        ops.getValues(service, "ssid", "A1", **kwargs)
    service.spreadsheets.return_value.values.return_value.batchGet.assert_not_called()

def test_update_values(service):
    response = ops.updateValues(service, "ssid", ValueRange("Sheet1!A1:B2", "ROWS", [[1, 2], [3, 4]]))
    assert(response.totalUpdatedCells == 4)
    assert(response.responses[0].updatedCells == 4)
    call = service.spreadsheets.return_value.values.return_value.batchUpdate.call_args
    assert(call.kwargs["body"] == {"valueInputOption": "USER_ENTERED",
                                   "includeValuesInResponse": False,
                                   "data": [{"range": "Sheet1!A1:B2", "majorDimension": "ROWS",
                                             "values": [[1, 2], [3, 4]]}]})

def test_update_values_needs_range(service):
    with pytest.raises(ValueError):
        ops.updateValues(service, "ssid", [ValueRange("", "ROWS", [[1]])])
    with pytest.raises(ValueError):
        ops.updateValues(service, "ssid", ValueRange("A1"), valueInputOption="LOUD")

def test_clear_values(service):
    response = ops.clearValues(service, "ssid", ["Sheet1!A:ZZ"])
    assert(response.clearedRanges == ["Sheet1!A1:ZZ1000"])
    assert(not ops.clearValues(service, "", []))

def test_batch_update_dict(service):
    response = ops.batchUpdate(service, "ssid", {"requests": []})
    assert(response.spreadsheetId == "ssid")
    service.spreadsheets.return_value.batchUpdate.assert_called_once_with(spreadsheetId="ssid",
                                                                          body={"requests": []})
