"""
HTML attribute serialization.
"""

import html
from typing import Any, Mapping


def html_escape(value: Any) -> str:
    """
    Escape a value for use inside a quoted attribute.

    Args:
        value: Any value, converted with str().

    Returns:
        Escaped string (quotes included).
    """
    return html.escape(str(value), quote=True)


def html_attrs(attributes: Mapping[str, Any]) -> str:
    """
    Serialize attributes as `key='value'` pairs sorted by key.

    None and False values are skipped; True and empty values render the
    bare key.

    Args:
        attributes: Attribute names to values.

    Returns:
        Space separated attribute string.
    """
    parts = []
    for key in sorted(attributes):
        value = attributes[key]
        if value is None or value is False:
            continue
        if value is True or value == "":
            parts.append(key)
        else:
            parts.append(f"{key}='{html_escape(value)}'")
    return " ".join(parts)
