"""
Exceptions raised while translating addresses.
All of these are local validation failures, nothing here is ever retried.
"""

class GoogleSheetsError(Exception):
    """Base for everything raised by gwsheets itself"""

class InvalidColumnError(GoogleSheetsError, ValueError):
    """Column token is empty, not alphabetic or an index below 1"""

class MalformedAddressError(GoogleSheetsError, ValueError):
    """Address string doesn't fit the A1 grammar"""

class SheetNotFoundError(GoogleSheetsError, LookupError):
    """Ordinal, title or ID doesn't match any sheet in the catalog"""
