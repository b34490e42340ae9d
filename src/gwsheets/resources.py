from dataclasses import asdict
from typing import Any

def prune(value: Any) -> Any:
    """
    Recursively drop None valued fields from dicts.  The API treats a
    missing field as 'unset' (e.g. an unbounded GridRange end or no sheetId)
    whereas an explicit null is not always accepted.
    List elements are positional (a None cell in a row is a blank cell)
    so they are recursed into but never removed.
    """
    if isinstance(value, dict):
        return {k: prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [prune(v) for v in value]
    return value

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses with nested resources override fixup() to coerce raw dicts
    from a response into the right classes.
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the Sheets client, with unset (None) fields removed.
        Something more complicated can override.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return prune(asdict(self))

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass

