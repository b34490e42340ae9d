from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import *
from .resources import from_response

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # need to strip off the trailing 'Request' class name and
        # set the first letter to lower case.  could be done
        # several ways but lets go re
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        return {m.group(1).lower() + m.group(2): self.to_base()}

# the request key is pulled out of the class name via self.__class__.__name__

@dataclass
class UpdateSheetPropertiesRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatesheetpropertiesrequest
    fields is the mask of what in properties to actually change, e.g. 'title'
    """
    properties: SheetProperties|dict
    fields: str

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = from_response(SheetProperties, self.properties)

@dataclass
class ClearBasicFilterRequest(GoogleSheetsUpdateRequestBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#clearbasicfilterrequest"""
    sheetId: int|None = field(default=None)

@dataclass
class SetBasicFilterRequest(GoogleSheetsUpdateRequestBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#setbasicfilterrequest"""
    filter: BasicFilter|dict

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.filter = from_response(BasicFilter, self.filter)

    def to_base(self) -> dict:
        return {'filter': self.filter.to_base()}

@dataclass
class RepeatCellRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#repeatcellrequest
    Apply the same cell data to every cell in range, limited to the fields mask.
    """
    range: GridRange|dict
    cell: CellData|dict
    fields: str

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = from_response(GridRange, self.range)
        self.cell = from_response(CellData, self.cell)

@dataclass
class GoogleSheetsUpdateRequest(GoogleWorkSpaceResourceBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)
    responseRanges: List[str] = field(default_factory=list)
    responseIncludeGridData: bool = field(default=False)

    def to_base(self) -> dict:
        return {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else r
                         for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse,
            'responseRanges': list(self.responseRanges),
            'responseIncludeGridData': self.responseIncludeGridData,
        }

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)
    updatedSpreadsheet: Spreadsheet|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        if self.updatedSpreadsheet is not None:
            self.updatedSpreadsheet = from_response(Spreadsheet, self.updatedSpreadsheet)

@dataclass
class ClearValuesRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchClear#response-body
    """
    spreadsheetId: str = field(default="")
    clearedRanges: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

@dataclass
class GetValuesRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet#response-body
    """
    spreadsheetId: str = field(default="")
    valueRanges: list[ValueRange|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.valueRanges = [from_response(ValueRange, vr) for vr in self.valueRanges]

@dataclass
class UpdateValuesRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    totalUpdatedRows: int = field(default=0)
    totalUpdatedColumns: int = field(default=0)
    totalUpdatedCells: int = field(default=0)
    totalUpdatedSheets: int = field(default=0)
    responses: list[UpdateValuesResponse|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        """Response is valid if an ID came back"""
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.responses = [from_response(UpdateValuesResponse, r) for r in self.responses]
