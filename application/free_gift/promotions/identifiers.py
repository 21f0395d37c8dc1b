import re
from typing import Optional

# Terminal path segment of a platform-global id, e.g. gid://shopify/ProductVariant/42
TRAILING_ID_PATTERN = re.compile(r"/(\d+)\Z", re.ASCII)


def extract_id(gid: Optional[str]) -> Optional[int]:
    """
    Extract the numeric id from a platform-global identifier.

    Only the digits of the last path segment count, so
    "gid://shopify/ProductVariant/42" and "/other/path/42" both give 42.

    Args:
        gid: Global identifier string, may be None or empty

    Returns:
        The numeric id, or None when the string has no trailing "/<digits>"
    """
    if not gid:
        return None
    match = TRAILING_ID_PATTERN.search(gid)
    return int(match.group(1)) if match else None


def ids_match(left: Optional[str], right: Optional[str]) -> bool:
    """Two identifiers match when both parse and resolve to the same number."""
    left_id = extract_id(left)
    return left_id is not None and left_id == extract_id(right)
