"""
Class implementations of sheets request resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  The nested aspect does cause some headaches as there
is a handy dataclass.asdict() method to get a dict translation of the
class fields, which is exactly what that request client needs, but
there's no inverse support, as in initializing a dataclass from a dict.
So dataclasses with dataclasses as fields coerce raw dicts in fixup().
Field names follow the API (camelCase) so to_base() is the request body.
Not all resources/requests/responses are implemented.
"""
import re

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, List, Self

from ..resources import GoogleWorkSpaceResourceBase

def from_response(cls: type, data: dict|Any) -> Any:
    """
    Build a resource dataclass from a response dict, ignoring any keys
    the class doesn't model since the API adds fields over time.
    """
    if isinstance(data, cls):
        return data
    names = {f.name for f in fields(cls) if f.init}
    return cls(**{k: v for k, v in dict(data or {}).items() if k in names})

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DATE_TIME_RENDER_OPTIONS = {
        "SERIAL": "SERIAL_NUMBER",
        "SERIAL_NUMBER": "SERIAL_NUMBER",
        "FORMATTED": "FORMATTED_STRING",
        "FORMATTED_STRING": "FORMATTED_STRING"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._VALID_VALUE_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._VALID_DATE_TIME_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")

@dataclass
class Color(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#color
    Channels are 0.0-1.0.  The API leaves out zero channels in responses
    so every channel defaults to 0.  Alpha is carried but never used for
    the hex translation in either direction.
    """
    red: float = field(default=0.0)
    green: float = field(default=0.0)
    blue: float = field(default=0.0)
    alpha: float|None = field(default=None)

    _hex_re: ClassVar[re.Pattern] = re.compile(r"^#?(?:([0-9a-fA-F]{6})|([0-9a-fA-F]{3}))$")

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """
        '#rrggbb' or the '#rgb' shorthand (each digit doubled), the '#'
        is optional.  raises ValueError on anything else.
        """
        m = cls._hex_re.match(str(value).strip())
        if not m:
            raise ValueError(f"Invalid hex color: {value}")
        digits = m.group(1) or "".join(c * 2 for c in m.group(2))
        red, green, blue = (int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(red, green, blue)

    def to_hex(self) -> str:
        """Lower case '#rrggbb'"""
        channels = (self.red, self.green, self.blue)
        return "#" + "".join(f"{max(0, min(255, round((c or 0) * 255))):02x}" for c in channels)

@dataclass
class NumberFormat(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#numberformat
    """
    type: str = field(default="")
    pattern: str = field(default="")

    valid_values: ClassVar[List[str]] = ['TEXT', 'NUMBER', 'PERCENT',
                                         'CURRENCY', 'DATE', 'TIME',
                                         'DATE_TIME', 'SCIENTIFIC']

    def __post_init__(self):
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.type) and self.type in self.valid_values

    def fixup(self) -> None:
        if self.type:
            if self.type not in self.valid_values:
                t = str(self.type).upper()
                if t in self.valid_values:
                    self.type = t
                else:
                    raise ValueError('Invalid number format type: ' + t)

@dataclass
class CellFormat(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#cellformat
    Only the number format is modelled.
    """
    numberFormat: NumberFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.numberFormat is not None:
            self.numberFormat = from_response(NumberFormat, self.numberFormat)

@dataclass
class CellData(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#celldata"""
    userEnteredFormat: CellFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.userEnteredFormat is not None:
            self.userEnteredFormat = from_response(CellFormat, self.userEnteredFormat)

@dataclass
class SpreadsheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties
    """
    title: str = field(default="")
    locale: str = field(default="")
    timeZone: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.title)

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties
    Everything defaults to None so the same class works for a full response
    and for the sparse properties of an updateSheetProperties request.
    """
    sheetId: int|None = field(default=None)
    title: str|None = field(default=None)
    index: int|None = field(default=None)
    sheetType: str|None = field(default=None)
    gridProperties: dict|None = field(default=None)
    hidden: bool|None = field(default=None)
    tabColor: Color|dict|None = field(default=None)
    tabColorStyle: dict|None = field(default=None)
    rightToLeft: bool|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.tabColor is not None:
            self.tabColor = from_response(Color, self.tabColor)

    def __bool__(self) -> bool:
        """
        True if it is valid, which is the ID and index are 0 or positive
        as negative index is not possible
        """
        return (self.sheetId is not None and self.sheetId >= 0 and
                self.index is not None and self.index >= 0 and bool(self.title))

    def __str__(self) -> str:
        if self:
            return f"{self.title}({self.sheetId}[{self.index}])"
        return "<invalid sheet>"

    @property
    def color(self) -> Color|None:
        """
        Tab color, preferring the newer tabColorStyle.  Theme colors have
        no RGB value so come back as None.
        """
        style = self.tabColorStyle or {}
        if style.get("rgbColor") is not None:
            return from_response(Color, style["rgbColor"])
        return self.tabColor

@dataclass
class GridRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
    0-based and half open, so the end indices are exclusive.  None means
    unbounded on that side, or for sheetId, not known here and left to the API.
    """
    sheetId: int|None = field(default=None)
    startRowIndex: int|None = field(default=None)
    endRowIndex: int|None = field(default=None)
    startColumnIndex: int|None = field(default=None)
    endColumnIndex: int|None = field(default=None)

    def __bool__(self) -> bool:
        return self.sheetId is not None and self.sheetId >= 0

@dataclass
class ConditionValue(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#conditionvalue"""
    userEnteredValue: str|None = field(default=None)
    relativeDate: str|None = field(default=None)

@dataclass
class BooleanCondition(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#booleancondition"""
    type: str = field(default="")
    values: List[ConditionValue|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.values = [from_response(ConditionValue, v) for v in self.values]

@dataclass
class FilterCriteria(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#filtercriteria"""
    condition: BooleanCondition|dict|None = field(default=None)
    hiddenValues: List[str]|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.condition is not None:
            self.condition = from_response(BooleanCondition, self.condition)

    @property
    def values(self) -> list[str]:
        """Literal values of the condition, for an equality filter the accepted set"""
        if self.condition is None:
            return []
        return [v.userEnteredValue for v in self.condition.values]

@dataclass
class BasicFilter(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#basicfilter
    criteria is keyed by 0-based column index.
    """
    range: GridRange|dict = field(default_factory=GridRange)
    criteria: dict[int, FilterCriteria|dict]|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = from_response(GridRange, self.range)
        if self.criteria is not None:
            self.criteria = {int(k): from_response(FilterCriteria, v) for k, v in self.criteria.items()}

    def to_base(self) -> dict:
        b = super().to_base()
        if 'criteria' in b:
            # JSON object keys, the API wants them as strings
            b['criteria'] = {str(k): v for k, v in b['criteria'].items()}
        return b

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="")
    values: list[list[bool|str|float|None]] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            self.majorDimension = GoogleSheetsEnum.dimension(str(self.majorDimension))

    def __bool__(self) -> bool:
        """
        A ValueRange is valid if the range string is not empty
        and the majorDimension has a valid value.
        """
        return bool(self.range) and bool(self.majorDimension)

@dataclass
class UpdateValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse
    """
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) and bool(self.updatedRange)

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet within a spreadsheet, only what gets used here.
    """
    properties: SheetProperties|dict = field(default_factory=SheetProperties)
    basicFilter: BasicFilter|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = from_response(SheetProperties, self.properties)
        if self.basicFilter is not None:
            self.basicFilter = from_response(BasicFilter, self.basicFilter)

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet.
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=SpreadsheetProperties)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = from_response(SpreadsheetProperties, self.properties)
        self.sheets = [from_response(Sheet, s) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        val = 'unconnected'
        if self.spreadsheetId:
            if self.sheets:
                val = f"{self.properties.title}[{','.join(str(s) for s in self.sheets)}]"
            else:
                val = f"{self.spreadsheetId}(unconnected)"
        return val
