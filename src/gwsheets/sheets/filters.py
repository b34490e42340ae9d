from collections.abc import Iterable, Mapping

from .a1 import GoogleSheetsA1Notation
from .resources import BooleanCondition, ConditionValue, FilterCriteria

def _literal(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)

def _literal_values(values: object) -> list[str]:
    # None is no values at all, not the text 'None'
    if values is None:
        return []
    # a lone string is one value, not a sequence of characters
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Iterable):
        values = [values]
    return list(dict.fromkeys(_literal(v) for v in values if v is not None))

def build_filter_criteria(column_filters: Mapping[str, object]) -> dict[int, FilterCriteria]:
    """
    Build basic filter criteria from column letters to accepted values:

        {"B": "active", "D": ["x", "y"]}

    gives column 1 showing only 'active' and column 3 showing 'x' or 'y'.
    The keys are column letters, not header text.  A None value gives a
    condition with no values, bytes are taken as UTF-8 text.

    raises: InvalidColumnError for a key that isn't a column label.
    """
    criteria = {}
    for column, values in column_filters.items():
        index = GoogleSheetsA1Notation.col_to_int(column) - 1
        condition = BooleanCondition("TEXT_EQ",
                                     [ConditionValue(userEnteredValue=v) for v in _literal_values(values)])
        criteria[index] = FilterCriteria(condition=condition)
    return criteria
