"""Query string construction for TidyHQ endpoints."""

from typing import Any, Mapping, Sequence
from urllib.parse import quote


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


def make_url_parameters(keys: Sequence[str], data: Mapping[str, Any]) -> str:
    """Build a query string from the options a caller supplied.

    The suffix of each key selects how its value is rendered:

    - ``limit`` renders ``limit=10``
    - ``ids[]`` renders a list as ``ids[]=1&ids[]=2``
    - ``filter[[]]`` renders a list of dicts as ``filter[]field=value`` per entry
    - ``filter_equals[][]`` renders a dict as ``filter_equals[field]=value``

    Keys missing from ``data`` (or set to None) are skipped.

    Args:
        keys: Parameter keys accepted by the endpoint
        data: Caller options

    Returns:
        Query string starting with "?", or "" when nothing applies

    Example:
        >>> make_url_parameters(["limit", "ids[]"], {"limit": 10, "ids": [1, 2]})
        '?limit=10&ids[]=1&ids[]=2'
    """
    parameters: list[str] = []

    for key in keys:
        if key.endswith("[][]"):
            name, style = key[:-4], "dict"
        elif key.endswith("[[]]"):
            name, style = key[:-4], "list_of_dicts"
        elif key.endswith("[]"):
            name, style = key[:-2], "list"
        else:
            name, style = key, "plain"

        value = data.get(name)
        if value is None:
            continue

        if style == "list":
            parameters.extend(f"{name}[]={_format_value(item)}" for item in value)
        elif style == "list_of_dicts":
            for entry in value:
                parameters.extend(
                    f"{name}[]{field}={_format_value(field_value)}"
                    for field, field_value in entry.items()
                )
        elif style == "dict":
            parameters.extend(
                f"{name}[{field}]={_format_value(field_value)}"
                for field, field_value in value.items()
            )
        else:
            parameters.append(f"{name}={_format_value(value)}")

    if not parameters:
        return ""
    return "?" + "&".join(parameters)
