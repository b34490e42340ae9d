"""
Thin wrappers around the Sheets v4 service calls.
Every function takes the built service (see GWSAccess.get_service) as its
first argument, there is no module level connection.  HttpError and
auth failures from the client come straight through.
"""
import logging

from collections.abc import Iterable
from googleapiclient.discovery import Resource

from .resources import *
from .requests import *
from .a1 import A1Address, GoogleSheetsA1Notation

logger = logging.getLogger(__name__)

def get(service: Resource, spreadsheetId: str,
        ranges: Iterable[A1Address|str] = (),
        includeGridData: bool = False,
        fields: str|None = None,
        num_retries: int = 0) -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    This is for retrieving spreadsheet properties but can also include data
    if you need it.
    """
    if not spreadsheetId:
        raise ValueError("get() needs a spreadsheet ID")
    kwargs = {'spreadsheetId': spreadsheetId,
              'ranges': GoogleSheetsA1Notation.to_str_list(ranges),
              'includeGridData': includeGridData}
    if fields:
        kwargs['fields'] = fields
    logger.debug("spreadsheets.get %s", spreadsheetId)
    response = service.spreadsheets().get(**kwargs).execute(num_retries=num_retries)
    return from_response(Spreadsheet, response or {'spreadsheetId': spreadsheetId})

def getSheets(service: Resource, spreadsheetId: str,
              num_retries: int = 0) -> list[SheetProperties]:
    """
    Just the properties of every sheet in tab order, which is all a
    SheetCatalog needs.  Asks for only those fields to keep the response small.
    """
    spreadsheet = get(service, spreadsheetId, fields="spreadsheetId,sheets.properties",
                      num_retries=num_retries)
    return [s.properties for s in spreadsheet.sheets]

def batchUpdate(service: Resource, spreadsheetId: str,
                request: GoogleSheetsUpdateRequest|dict,
                num_retries: int = 0) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    This is for altering any spreadsheet properties but not actual data read/write/clear
    which is done from the values() resource.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else dict(request)
    logger.debug("spreadsheets.batchUpdate %s: %d requests", spreadsheetId, len(body.get('requests', [])))
    response = service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetId,
                                                  body=body).execute(num_retries=num_retries)
    return from_response(GoogleSheetsUpdateRequestResponse, response or {})

def clearValues(service: Resource, spreadsheetId: str,
                ranges: str|A1Address|Iterable[str|A1Address],
                num_retries: int = 0) -> ClearValuesRequestResponse:
    """
    Wrapper for calling the batchClear() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchClear
    Setting the specified range of cells to the empty or blank state.
    """
    range_list = GoogleSheetsA1Notation.to_str_list(ranges)
    if not range_list:
        return ClearValuesRequestResponse(spreadsheetId)
    logger.debug("values.batchClear %s: %s", spreadsheetId, range_list)
    r = service.spreadsheets().values().batchClear(spreadsheetId=spreadsheetId,
                                                   body={"ranges": range_list}).execute(num_retries=num_retries)
    return from_response(ClearValuesRequestResponse, r or {})

def getValues(service: Resource, spreadsheetId: str,
              ranges: str|A1Address|Iterable[str|A1Address],
              dimension: str = "ROWS",
              valueRenderOption: str = "FORMATTED",
              dateTimeRenderOption: str = "SERIAL",
              num_retries: int = 0) -> GetValuesRequestResponse:
    """
    Wrapper for calling the batchGet() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet
    Get the cell data from the specified ranges.  We always call batchGet, even for
    a single range instead of calling get() just for consistency.  Calling batchGet()
    with only 1 range is fine.
    """
    range_list = GoogleSheetsA1Notation.to_str_list(ranges)
    dim = GoogleSheetsEnum.dimension(dimension)
    if not dim:
        raise ValueError(f"Invalid majorDimension value: {dimension}")
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    date_time_render = GoogleSheetsEnum.dateTimeRenderOption(dateTimeRenderOption)
    if not date_time_render and value_render != "FORMATTED_VALUE":
        raise ValueError(f"Invalid dateTimeRenderOption value: {dateTimeRenderOption}")

    if not range_list:
        return GetValuesRequestResponse(spreadsheetId)
    kwargs = {'spreadsheetId': spreadsheetId,
              'ranges': range_list,
              'majorDimension': dim,
              'valueRenderOption': value_render}
    if date_time_render:
        kwargs['dateTimeRenderOption'] = date_time_render
    logger.debug("values.batchGet %s: %s", spreadsheetId, range_list)
    r = service.spreadsheets().values().batchGet(**kwargs).execute(num_retries=num_retries)
    return from_response(GetValuesRequestResponse, r or {})

def updateValues(service: Resource, spreadsheetId: str,
                 data: ValueRange|Iterable[ValueRange],
                 valueInputOption: str = "USER",
                 includeValuesInResponse: bool = False,
                 num_retries: int = 0) -> UpdateValuesRequestResponse:
    """
    Wrapper for calling the batchUpdate() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
    """
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    dlist = [data] if isinstance(data, ValueRange) else list(data)
    for d in dlist:
        if not d.range:
            raise ValueError("updateValues() every ValueRange needs a range")
    body = {'valueInputOption': value_input,
            'includeValuesInResponse': includeValuesInResponse,
            'data': [d.to_base() for d in dlist]}
    logger.debug("values.batchUpdate %s: %s", spreadsheetId, [d.range for d in dlist])
    r = service.spreadsheets().values().batchUpdate(spreadsheetId=spreadsheetId,
                                                    body=body).execute(num_retries=num_retries)
    return from_response(UpdateValuesRequestResponse, r or {})
