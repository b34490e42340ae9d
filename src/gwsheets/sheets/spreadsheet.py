import logging
import re

from collections.abc import Callable, Iterable, Mapping
from functools import partial
from googleapiclient.discovery import Resource

from . import ops
from .a1 import A1Address, A1Cell, GoogleSheetsA1Notation
from .catalog import SheetCatalog, SheetDescriptor, SheetReference
from .filters import build_filter_criteria
from .ranges import resolve_range
from .requests import *
from .resources import *

logger = logging.getLogger(__name__)

class GoogleSpreadSheet():
    """
    One spreadsheet and the context needed to address it: the service,
    the cached sheet catalog and the default sheet/range used when an
    address leaves them out.

    The spreadsheet can be given as an ID or a URL copied from the browser.
    A URL ending in '#gid=<sheet id>' makes that sheet the default and
    '#gid=<sheet id>!<range>' sets the default range too, otherwise the
    default is the first sheet and columns A:ZZ.
    """
    DEFAULT_SHEET = "#1"
    DEFAULT_RANGE = "A:ZZ"

    _URL_RE = re.compile(r"^https?://[^/]+/spreadsheets/d/([^/#?]+)")
    _GID_RE = re.compile(r"#gid=(\d+)(?:!([A-Za-z\d:]+))?$")

    def __init__(self, spreadsheet: str, service: Resource,
                 num_retries: int = 0) -> None:
        """
        spreadsheet:    Spreadsheet ID or URL.
        service:        Built sheets v4 service, see GWSAccess.get_service().
        num_retries:    Passed through to every request execute().
        """
        ssid = str(spreadsheet).strip()
        self._default_sheet: SheetReference = self.DEFAULT_SHEET
        self._default_range = self.DEFAULT_RANGE
        m = self._URL_RE.match(ssid)
        if m:
            g = self._GID_RE.search(ssid)
            if g:
                self._default_sheet = int(g.group(1))
                if g.group(2):
                    self._default_range = str(self._open_start(GoogleSheetsA1Notation.parse(g.group(2))))
            ssid = m.group(1)
        if not ssid:
            raise ValueError("A spreadsheet ID is required")
        self._id = ssid
        self._service = service
        self._num_retries = num_retries
        self._catalog = SheetCatalog(ssid, partial(ops.getSheets, service, num_retries=num_retries))

    def __str__(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __len__(self) -> int:
        """Number of sheets in this spreadsheet"""
        return len(self._catalog)

    def __contains__(self, val: str|int) -> bool:
        """
        Is the sheet in this spreadsheet?
        val can be either a string (title) or int (ID)
        """
        return val in self._catalog

    def __getitem__(self, item: SheetReference) -> SheetDescriptor:
        """Sheet by title, '#N' position or int ID"""
        return self._catalog.descriptor(item)

    @property
    def id(self) -> str:
        return self._id

    @property
    def catalog(self) -> SheetCatalog:
        return self._catalog

    @property
    def default_sheet(self) -> SheetReference:
        return self._default_sheet

    @property
    def default_range(self) -> str:
        return self._default_range

    @property
    def sheets(self) -> tuple[SheetDescriptor, ...]:
        return self._catalog.fetch()

    def refresh(self) -> tuple[SheetDescriptor, ...]:
        """Refetch the sheets, needed after tabs are added, moved or renamed elsewhere"""
        return self._catalog.refresh()

    def sheet_id(self, ref: SheetReference = None) -> int:
        return self._catalog.resolve_id(self._default_sheet if ref is None else ref)

    def sheet_name(self, ref: SheetReference = None) -> str:
        return self._catalog.resolve_title(self._default_sheet if ref is None else ref)

    def sheet_list(self) -> list[dict]:
        return self._catalog.sheet_list()

    @staticmethod
    def _open_start(a1: A1Address) -> A1Address:
        # 'A:ZZ' reads as 'A1:ZZ', a start column without a row starts at row 1
        if a1.start.column is not None and a1.start.row is None:
            a1 = a1.replace(start=A1Cell(a1.start.column, 1))
        return a1

    def resolve_area(self, area: str|None = None) -> str:
        """
        Turn whatever a caller passed as an area into a full '<title>!<range>' A1 string.

            None/''         default sheet, default range
            'x!B2:C5'       sheet x (title or '#N'), that range
            "'#2'!B2"        quoted, so the sheet titled '#2'
            'B2:C5', 'B2'   default sheet, that range
            anything else   taken as a sheet reference with the default range
        """
        a = (area or "").strip()
        rect = None
        if not a:
            sheet = self.sheet_name()
        elif '!' in a:
            a1 = GoogleSheetsA1Notation.parse(a)
            sheet = self._catalog.resolve_title(a1.sheet, literal=a1.quoted)
            rect = a1.replace(sheet="")
        elif GoogleSheetsA1Notation.valid_a1(a) and (':' in a or GoogleSheetsA1Notation.parse(a).start.complete):
            sheet = self.sheet_name()
            rect = GoogleSheetsA1Notation.parse(a)
        else:
            sheet = self.sheet_name(a)
        a1 = rect if rect is not None else GoogleSheetsA1Notation.parse(self._default_range)
        # sheet is a real title by now, quoted if it looks like '#N'
        return str(self._open_start(a1).replace(sheet=sheet, quoted=True))

    def range(self, area: str|None = None) -> GridRange:
        """GridRange for an area, see resolve_area()"""
        return resolve_range(self.resolve_area(area), self._catalog, self._default_sheet)

    def batchUpdate(self, requests: list[GoogleSheetsUpdateRequestBase|dict]) -> GoogleSheetsUpdateRequestResponse:
        return ops.batchUpdate(self._service, self._id, GoogleSheetsUpdateRequest(requests),
                               num_retries=self._num_retries)

    def read(self, area: str|None = None,
             valueRenderOption: str = "FORMATTED") -> list[list]:
        """Values in an area as a list of rows, trailing empty rows/cells are left off by the API"""
        response = ops.getValues(self._service, self._id, self.resolve_area(area),
                                 valueRenderOption=valueRenderOption,
                                 num_retries=self._num_retries)
        return response.valueRanges[0].values if response.valueRanges else []

    def save(self, area: str|None, rows: Iterable[Iterable], log: bool = False) -> int:
        """
        Write rows into an area as if typed in by a user, so formulas and
        dates are parsed.

        return: Number of cells updated.
        """
        data = ValueRange(self.resolve_area(area), "ROWS", [list(r) for r in rows])
        response = ops.updateValues(self._service, self._id, data, "USER_ENTERED",
                                    num_retries=self._num_retries)
        if log:
            logger.info("%d cells updated.", response.totalUpdatedCells)
        return response.totalUpdatedCells

    def clear(self, area: str|None = None) -> list[str]:
        """Blank out an area, returns the ranges actually cleared"""
        response = ops.clearValues(self._service, self._id, self.resolve_area(area),
                                   num_retries=self._num_retries)
        return response.clearedRanges

    def filter(self, area: str|None = None,
               criteria: Mapping[str, object]|None = None) -> GoogleSheetsUpdateRequestResponse:
        """
        Replace the sheet's basic filter with one over area.
        criteria maps column letters to the value or values to show, see build_filter_criteria().
        """
        grid = self.range(area)
        basic = BasicFilter(grid, build_filter_criteria(criteria) if criteria else None)
        return self.batchUpdate([ClearBasicFilterRequest(grid.sheetId),
                                 SetBasicFilterRequest(basic)])

    def format(self, area: str|None, pattern: str) -> GoogleSheetsUpdateRequestResponse:
        """Apply a NUMBER format pattern such as '#,##0.00' to every cell in area"""
        cell = CellData(CellFormat(NumberFormat("NUMBER", pattern)))
        return self.batchUpdate([RepeatCellRequest(self.range(area), cell,
                                                   "userEnteredFormat.numberFormat")])

    def color(self, sheet: SheetReference, color: str|None = None) -> GoogleSheetsUpdateRequestResponse:
        """
        Set a sheet's tab color from '#rrggbb' or '#rgb', None removes it.
        Alpha is ignored.
        The sheet list is refetched afterwards so sheet_list() shows the new
        color, that is a second request on top of the update.
        """
        rgb = Color.from_hex(color).to_base() if color else None
        props = SheetProperties(sheetId=self.sheet_id(sheet),
                                tabColorStyle={'rgbColor': rgb} if rgb else None)
        response = self.batchUpdate([UpdateSheetPropertiesRequest(props, "tabColorStyle")])
        self._catalog.refresh()
        return response

    def rename(self, sheet: SheetReference, title: str|None = None,
               transform: Callable[[str], str]|None = None) -> GoogleSheetsUpdateRequestResponse:
        """
        Rename a sheet, either to title or to whatever transform returns
        when given the current title.
        The sheet list is refetched afterwards so the new title resolves,
        that is a second request on top of the update.
        """
        sheet_id = self.sheet_id(sheet)
        if title is None:
            if transform is None:
                raise ValueError("rename() needs a title or a transform")
            title = transform(self.sheet_name(sheet_id))
        if not title:
            raise ValueError("sheet titles can't be empty")
        props = SheetProperties(sheetId=sheet_id, title=str(title))
        response = self.batchUpdate([UpdateSheetPropertiesRequest(props, "title")])
        self._catalog.refresh()
        return response
