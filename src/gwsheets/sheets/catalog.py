import logging
import re
import threading

from dataclasses import dataclass, field
from collections.abc import Callable, Iterable, Iterator

from .errors import SheetNotFoundError
from .resources import Color, SheetProperties, from_response

logger = logging.getLogger(__name__)

SheetReference = str|int|None
SheetFetcher = Callable[[str], Iterable[SheetProperties|dict]]

@dataclass(frozen=True)
class SheetDescriptor():
    """
    Snapshot of one sheet (tab) as it was when the catalog was fetched.
    id is stable for the life of the sheet, index is its position in
    the tab order and shifts whenever tabs are moved.
    """
    id: int
    title: str
    color: Color|None = field(default=None, compare=False)
    index: int = field(default=-1)

    @classmethod
    def from_properties(cls, props: SheetProperties|dict, position: int = -1) -> "SheetDescriptor":
        p = from_response(SheetProperties, props)
        index = p.index if p.index is not None else position
        return cls(int(p.sheetId or 0), str(p.title or ""), p.color, index)

    @property
    def hex_color(self) -> str|None:
        return self.color.to_hex() if self.color is not None else None

class SheetCatalog():
    """
    Cached list of the sheets in one spreadsheet, used to turn the
    various ways of naming a sheet into a concrete ID or title:

        '#N'        The Nth sheet (1-based) in tab order at fetch time.
        None/''     The first sheet.
        int         A sheet ID.
        str         A literal title.  Titles should be unique but that
                    isn't enforced, first match wins.

    A sheet whose real title looks like '#N' is only reachable with
    literal=True, which is what a quoted sheet in an A1 address asks for.

    The list is fetched on first use and kept until refresh() is called,
    nothing ever refreshes it behind the caller's back.  So '#N' goes stale
    if tabs are reordered remotely until refresh().
    """
    _ORDINAL_RE = re.compile(r"^#(\d+)$")

    def __init__(self, spreadsheet_id: str, fetcher: SheetFetcher) -> None:
        """
        spreadsheet_id: Spreadsheet the sheets belong to.
        fetcher:        Callable taking the spreadsheet ID and returning the
                        SheetProperties (or raw dicts) of every sheet in order.
        """
        self._spreadsheet_id = spreadsheet_id
        self._fetcher = fetcher
        self._sheets: tuple[SheetDescriptor, ...]|None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = f"{len(self._sheets)} sheets" if self._sheets is not None else "unfetched"
        return f"{self.__class__.__name__}({self._spreadsheet_id}:{state})"

    def __len__(self) -> int:
        return len(self.fetch())

    def __iter__(self) -> Iterator[SheetDescriptor]:
        return iter(self.fetch())

    def __contains__(self, ref: object) -> bool:
        """Title or ID present?"""
        if isinstance(ref, int) and not isinstance(ref, bool):
            return any(s.id == ref for s in self.fetch())
        return any(s.title == ref for s in self.fetch())

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @property
    def fetched(self) -> bool:
        return self._sheets is not None

    def _load(self) -> tuple[SheetDescriptor, ...]:
        logger.debug("fetching sheet list for %s", self._spreadsheet_id)
        props = list(self._fetcher(self._spreadsheet_id))
        sheets = tuple(SheetDescriptor.from_properties(p, i) for i, p in enumerate(props))
        logger.debug("fetched %d sheets for %s", len(sheets), self._spreadsheet_id)
        return sheets

    def fetch(self) -> tuple[SheetDescriptor, ...]:
        """
        Sheets in tab order, fetched on the first call and cached after that.
        """
        sheets = self._sheets
        if sheets is None:
            with self._lock:
                if self._sheets is None:
                    self._sheets = self._load()
                sheets = self._sheets
        return sheets

    def refresh(self) -> tuple[SheetDescriptor, ...]:
        """
        Throw away the cached list and fetch again.  Resolutions that start
        after this returns see the new list.
        """
        with self._lock:
            self._sheets = self._load()
            return self._sheets

    def _ordinal(self, ref: str) -> int|None:
        m = self._ORDINAL_RE.match(ref)
        return int(m.group(1)) if m else None

    def descriptor(self, ref: SheetReference, literal: bool = False) -> SheetDescriptor:
        """
        Find the sheet a reference points at.
        literal: A str ref is only ever a title, never a '#N' placeholder.
        raises: SheetNotFoundError when nothing matches.
        """
        sheets = self.fetch()
        if ref is None or ref == "":
            if not sheets:
                raise SheetNotFoundError(f"spreadsheet {self._spreadsheet_id} has no sheets")
            return sheets[0]
        if isinstance(ref, int) and not isinstance(ref, bool):
            for s in sheets:
                if s.id == ref:
                    return s
            raise SheetNotFoundError(f"no sheet with ID {ref}")
        r = str(ref)
        n = None if literal else self._ordinal(r)
        if n is not None:
            if n < 1 or n > len(sheets):
                raise SheetNotFoundError(f"sheet {r} out of range, there are {len(sheets)} sheets")
            return sheets[n - 1]
        for s in sheets:
            if s.title == r:
                return s
        raise SheetNotFoundError(f"no sheet titled {r!r}")

    def resolve_id(self, ref: SheetReference, literal: bool = False) -> int:
        """
        Sheet ID for a reference.  An int is assumed to already be an ID
        and is handed back without checking, the API will complain if it's wrong.
        """
        if isinstance(ref, int) and not isinstance(ref, bool):
            return ref
        return self.descriptor(ref, literal).id

    def resolve_title(self, ref: SheetReference, literal: bool = False) -> str:
        """Sheet title for a reference, an int is looked up as an ID"""
        return self.descriptor(ref, literal).title

    def sheet_list(self) -> list[dict]:
        """
        Plain dicts of id, title and color (as '#rrggbb') for each sheet,
        color is left out for tabs without one.
        """
        sheets = []
        for s in self.fetch():
            d = {"id": s.id, "title": s.title}
            if s.hex_color is not None:
                d["color"] = s.hex_color
            sheets.append(d)
        return sheets
