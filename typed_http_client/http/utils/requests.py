import re

API_KEY_PATTERN = re.compile(r"api_key=(.[^&]*)")
KEY_VALUE_GROUP = 1
MIN_KEY_LENGTH_TO_REVEAL_PREFIX = 8


def deduct_api_key_from_string(value: str) -> str:
    """Mask `api_key` query values in a URL or message before it is logged or
    rendered into an error.

    Args:
        value: URL, or any text that may embed one.

    Returns:
        The text with every `api_key` value masked.
    """
    return API_KEY_PATTERN.sub(deduct_api_key, value)


def deduct_api_key(match: re.Match) -> str:
    # long keys keep two leading and two trailing characters for diagnostics
    key_value = match.group(KEY_VALUE_GROUP)
    if len(key_value) < MIN_KEY_LENGTH_TO_REVEAL_PREFIX:
        return "api_key=***"
    key_prefix = key_value[:2]
    key_postfix = key_value[-2:]
    return f"api_key={key_prefix}***{key_postfix}"
