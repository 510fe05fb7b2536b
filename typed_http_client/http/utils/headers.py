from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


def string_headers_or_none(
    headers: Optional[Mapping[Any, Any]],
) -> Optional[Dict[str, str]]:
    """Convert response headers into a plain string-keyed map of strings.

    Args:
        headers: The headers reported by the transport.

    Returns:
        A copy of the headers, or None when any key or value is not a string.
    """
    if headers is None:
        return None
    result = {}
    for key, value in headers.items():
        if not isinstance(key, str) or not isinstance(value, str):
            return None
        result[key] = value
    return result


def merge_multi_value_headers(items: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Fold repeated header names into a single comma-separated value.

    Args:
        items: Header name / value pairs, possibly with repeated names.

    Returns:
        The headers with one entry per name, in order of first appearance.
    """
    result: Dict[str, str] = {}
    for name, value in items:
        if name in result:
            result[name] = f"{result[name]}, {value}"
        else:
            result[name] = value
    return result
