"""
A1 to GridRange translation.
Everything a person types is 1-based and inclusive, everything the API
takes is 0-based and half open.  All of the +/- 1 lives here.
"""
from .a1 import A1Address, GoogleSheetsA1Notation
from .catalog import SheetCatalog, SheetReference
from .errors import MalformedAddressError
from .resources import GridRange

def _start_index(value: int|None) -> int:
    # an open start is the same as the first row/col
    return value - 1 if value is not None else 0

def _end_index(value: int|None) -> int|None:
    # 1-based inclusive to 0-based exclusive is -1 then +1, open ends stay unset
    return None if value is None else (value - 1) + 1

def resolve_range(address: str|A1Address, catalog: SheetCatalog,
                  default_sheet: SheetReference = None) -> GridRange:
    """
    Resolve an A1 address into a GridRange.

    address:        A1 string (or already parsed address).
    catalog:        Sheets of the spreadsheet the address refers to.
    default_sheet:  Sheet reference to use when the address doesn't name one.
                    If that is None too the sheetId is left unset.

    Open ended starts become 0 and open ended ends are left unset, so 'A:B'
    is every row of the first two columns.

    raises: MalformedAddressError on a bad address or a range that runs backwards,
            SheetNotFoundError if the sheet can't be resolved.
    """
    a1 = GoogleSheetsA1Notation.parse(address)
    if a1.sheet is not None:
        sheet_id = catalog.resolve_id(a1.sheet, literal=a1.quoted)
    elif default_sheet is not None:
        sheet_id = catalog.resolve_id(default_sheet)
    else:
        sheet_id = None

    grid = GridRange(sheetId=sheet_id,
                     startRowIndex=_start_index(a1.start.row),
                     endRowIndex=_end_index(a1.end.row),
                     startColumnIndex=_start_index(a1.start.column_int),
                     endColumnIndex=_end_index(a1.end.column_int))

    if grid.endRowIndex is not None and grid.endRowIndex <= grid.startRowIndex:
        raise MalformedAddressError(f"rows run backwards in {str(address)!r}")
    if grid.endColumnIndex is not None and grid.endColumnIndex <= grid.startColumnIndex:
        raise MalformedAddressError(f"columns run backwards in {str(address)!r}")
    return grid
