import re
import string

from dataclasses import dataclass, field
from collections.abc import Iterable

from . import GoogleSheetsMaxColumns
from .errors import InvalidColumnError, MalformedAddressError

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)

@dataclass(frozen=True)
class A1Cell():
    """
    One end of an A1 range in spreadsheet coordinates, so 1-based.
    Either part may be None which means that axis is open ended,
    'A' is the whole of column A and '5' the whole of row 5.
    """
    column: str|None = None
    row: int|None = None

    def __str__(self) -> str:
        return f"{self.column or ''}{self.row or ''}"

    @property
    def column_int(self) -> int|None:
        """1-based column index, None when open ended"""
        return GoogleSheetsA1Notation.col_to_int(self.column) if self.column else None

    @property
    def complete(self) -> bool:
        """Both column and row present, as in a real single cell"""
        return self.column is not None and self.row is not None

@dataclass(frozen=True)
class A1Address():
    """
    Result of parsing an A1 string:

    <sheet>!<start col><start row>:<end col><end row>

    sheet:  Sheet reference exactly as written (quotes removed), this may be
            a title or a '#N' ordinal placeholder.  None when the address
            had no '!' which means 'whatever the default sheet is'.
    start:  First cell.
    end:    Last cell, inclusive.  Same as start for a single cell.
    quoted: The sheet was written in quotes, so it is a literal title even
            if it looks like a '#N' placeholder.
    """
    sheet: str|None = None
    start: A1Cell = field(default_factory=A1Cell)
    end: A1Cell = field(default_factory=A1Cell)
    quoted: bool = False

    def __str__(self) -> str:
        return GoogleSheetsA1Notation.generate(self.sheet or "",
                                               self.start.column or "", self.start.row or 0,
                                               self.end.column or "", self.end.row or 0,
                                               literal=self.quoted)

    @property
    def rows_bounded(self) -> bool:
        """True if rows have bounded start/end"""
        return self.start.row is not None and self.end.row is not None

    @property
    def cols_bounded(self) -> bool:
        """True if cols have bounded start/end"""
        return self.start.column is not None and self.end.column is not None

    @property
    def bounded(self) -> bool:
        return self.rows_bounded and self.cols_bounded

    def replace(self, sheet: str|None = None,
                start: A1Cell|None = None, end: A1Cell|None = None,
                quoted: bool|None = None) -> "A1Address":
        """Copy with some aspects swapped out, None keeps the existing value"""
        return A1Address(self.sheet if sheet is None else sheet,
                         self.start if start is None else start,
                         self.end if end is None else end,
                         self.quoted if quoted is None else quoted)

class _A1Scanner():
    """
    Small hand rolled scanner over the address grammar:

        address := [sheet '!'] cell [':' cell]
        sheet   := quoted title | anything up to the first '!'
        cell    := letters digits | letters | digits

    Quoted titles use ' or " and a doubled quote inside is a literal quote,
    which is the only way a title can contain a '!'.
    """
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def error(self, reason: str) -> MalformedAddressError:
        return MalformedAddressError(f"{reason} in A1 address {self._text!r}")

    def peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def accept(self, char: str) -> bool:
        if self.peek() == char:
            self._pos += 1
            return True
        return False

    def sheet(self) -> tuple[str|None, bool]:
        """Sheet reference and whether it was quoted"""
        if self.peek() in ("'", '"'):
            return self._quoted_sheet(), True
        bang = self._text.find('!', self._pos)
        if bang < 0:
            return None, False
        title = self._text[self._pos:bang].strip()
        if not title:
            raise self.error("empty sheet reference")
        self._pos = bang + 1
        return title, False

    def _quoted_sheet(self) -> str:
        quote = self.peek()
        chars = []
        i = self._pos + 1
        while True:
            if i >= len(self._text):
                raise self.error("unterminated sheet title")
            c = self._text[i]
            if c == quote:
                if self._text[i + 1:i + 2] == quote:
                    chars.append(quote)
                    i += 2
                    continue
                break
            chars.append(c)
            i += 1
        self._pos = i + 1
        if not self.accept('!'):
            raise self.error("expected '!' after quoted sheet title")
        if not chars:
            raise self.error("empty sheet reference")
        return "".join(chars)

    def cell(self) -> A1Cell:
        start = self._pos
        while self.peek() in _LETTERS:
            self._pos += 1
        split = self._pos
        while self.peek() in _DIGITS:
            self._pos += 1
        letters = self._text[start:split]
        digits = self._text[split:self._pos]
        if not letters and not digits:
            raise self.error("missing cell")
        column = None
        row = None
        if letters:
            column = letters.upper()
            if GoogleSheetsA1Notation.col_to_int(column) > GoogleSheetsMaxColumns:
                raise self.error(f"column {column} past ZZZ")
        if digits:
            row = int(digits)
            if row < 1:
                raise self.error("rows start at 1")
        return A1Cell(column, row)

class GoogleSheetsA1Notation():
    """
    Translation of Google Sheets A1 notation.
    See https://developers.google.com/sheets/api/guides/concepts#:~:text=A1%20notation,an%20absolute%20range%20of%20cells

    A general A1 has the form:

    <title>!<start col><start row>:<end col><end row>

    Some notes on the above:
        All rows are integers, and are 1 based
        All cols are alphabetical, a bijective base-26 numeral A=1 ... Z=26, AA=27
        The maximum number of cols available is 18278 which corresponds to col ZZZ
        Start/end cols/rows may not be present, which means 'unbounded':
            A:B means all rows in columns A and B
            1:6 means all cols in rows 1 through 6
            C2:S means all cells in cols C through S starting from row 2
            A45 means a single cell of row 45 in col A
            A45:46 means rows 45 and 46 of col A (the end reuses the start column)
        title may be a real sheet title or '#N' meaning the Nth sheet,
        and may be quoted if it contains spaces or other non alphanumeric characters.
    """
    # plain titles that never need quoting
    _PLAIN_TITLE_RE = re.compile(r"^[a-zA-Z_]\w*$")
    # titles the API would confuse with a cell reference
    _CELL_LIKE_RE = re.compile(r"^[a-zA-Z]{1,3}\d+$")
    _ORDINAL_RE = re.compile(r"^#\d+$")

    @staticmethod
    def to_str_list(vals: str|A1Address|Iterable[str|A1Address]) -> list[str]:
        """
        Convenience function to take any input and return a list of
        strings, even if the input was a single instance.  The intent
        is an easy way to convert a list of A1s to strings before making
        a Google Sheets call.
        """
        if isinstance(vals, (str, A1Address)):
            return [str(vals)]
        return [str(v) for v in vals]

    @classmethod
    def col_to_int(cls, column: str) -> int:
        """
        Convert a sheet column label to its integer equivalent.
        Note that this is 1-based, so 'A' goes to 1, 'AA' to 27.
        Case doesn't matter.

        column: String of letters to translate.

        return: Integer index translation.
        raises: InvalidColumnError on an empty or non alphabetic label.
        """
        if not isinstance(column, str) or not column or not all(c in _LETTERS for c in column):
            raise InvalidColumnError(f"invalid column label: {column!r}")
        num = 0
        for c in column:
            # & 31 maps both 'A' and 'a' to 1
            num = num * 26 + (ord(c) & 31)
        return num

    @classmethod
    def int_to_col(cls, index: int) -> str:
        """
        Translate an int column index to its label.
        Note this is 1-based.

        index:  1-based column index

        return: Upper case column label.
        raises: InvalidColumnError if index is not an int >= 1.
        """
        if isinstance(index, bool) or not isinstance(index, int) or index < 1:
            raise InvalidColumnError(f"invalid column index: {index!r}")
        letters = []
        i = index
        while i > 0:
            i, r = divmod(i - 1, 26)
            letters.append(chr(r + 65))
        return "".join(reversed(letters))

    @classmethod
    def parse(cls, a1: str|A1Address) -> A1Address:
        """
        Split an A1 string into sheet reference, start and end cells.

        The shorthand where one end only gives a row is expanded here
        so callers never see it: 'A1:5' is A1:A5 and '5:B7' is B5:B7.
        Pure row or column ranges ('1:6', 'A:B') stay open ended.

        raises: MalformedAddressError if the string doesn't fit the grammar.
        """
        if isinstance(a1, A1Address):
            return a1
        if not isinstance(a1, str):
            raise MalformedAddressError(f"A1 address must be a string, not {type(a1).__name__}")
        scanner = _A1Scanner(a1.strip())
        sheet, quoted = scanner.sheet()
        start = scanner.cell()
        end = scanner.cell() if scanner.accept(':') else start
        if not scanner.at_end():
            raise scanner.error(f"unexpected {scanner.peek()!r}")
        start, end = cls._expand_shorthand(start, end)
        return A1Address(sheet, start, end, quoted)

    @staticmethod
    def _expand_shorthand(start: A1Cell, end: A1Cell) -> tuple[A1Cell, A1Cell]:
        if end.column is None and end.row is not None and start.column is not None:
            end = A1Cell(start.column, end.row)
        elif start.column is None and start.row is not None and end.column is not None:
            start = A1Cell(end.column, start.row)
        return start, end

    @classmethod
    def valid_a1(cls, a1: str) -> bool:
        """
        Is the supplied A1 string valid notation?
        returns: True/False if a1 is valid/invalid format.
        """
        try:
            cls.parse(a1)
        except (MalformedAddressError, InvalidColumnError):
            return False
        return True

    @classmethod
    def quote_title(cls, title: str, literal: bool = False) -> str:
        """
        Quote a sheet title for use in an A1 string if it needs it.
        Ordinal placeholders are left alone so they survive a round trip,
        unless literal says this is a real title that only looks like one.
        """
        t = str(title)
        if cls._ORDINAL_RE.match(t):
            return "'" + t + "'" if literal else t
        if cls._PLAIN_TITLE_RE.match(t) and not cls._CELL_LIKE_RE.match(t):
            return t
        return "'" + t.replace("'", "''") + "'"

    @classmethod
    def generate(cls, sheet: str = "",
                 start_col: str|int = "", start_row: int = 0,
                 end_col: str|int = "", end_row: int = 0,
                 literal: bool = False) -> str:
        """
        Generate the A1 representation based on the input parameters.
        sheet:      Sheet title, can be empty.
        start_col:  Starting column, can be int index or label.
                    If empty or 0 will signal unbounded start.
        start_row:  Starting row, as a 1-based integer index.
                    If 0 will signal an unbounded start.
        end_col:    Ending column, can be int index or label.
                    If empty or 0 will signal unbounded end.
        end_row:    Ending row, as a 1-based integer index.
                    If 0 will signal an unbounded end.
        literal:    sheet is a real title, quote it even if it looks like '#N'.

        returns:    A1 string representation.
        raises:     MalformedAddressError if there is nothing to render.
        """
        sc = cls.int_to_col(start_col) if isinstance(start_col, int) and start_col else str(start_col or "").upper()
        ec = cls.int_to_col(end_col) if isinstance(end_col, int) and end_col else str(end_col or "").upper()
        start = f"{sc}{int(start_row) or ''}"
        end = f"{ec}{int(end_row) or ''}"
        if start and end and (start != end or not (sc and start_row)):
            rect = f"{start}:{end}"
        else:
            rect = start or end

        a1 = cls.quote_title(sheet, literal) if sheet else ""
        if a1 and rect:
            a1 += '!' + rect
        elif rect:
            a1 = rect
        if not a1:
            raise MalformedAddressError("nothing to generate an A1 address from")
        return a1
