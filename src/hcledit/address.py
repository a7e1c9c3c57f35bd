"""
Address parsing.

An address is a dot-separated path such as `resource.aws_instance.foo.ami`.
The last segment names an attribute; the segments before it address a
block, where each segment may be either a label or a nested block type.

Splitting is purely lexical: there is no escaping and segments are not
validated. An address that names nothing simply matches nothing later.
"""

from typing import List


class EmptyAddressError(ValueError):
    """Raised when an address (or a derived block address) is empty."""
    pass


def parse_address(address: str) -> List[str]:
    """
    Split an address into its segments.

    Args:
        address: Dotted address string

    Returns:
        Segments in order, empty segments included ("a..b" → ["a", "", "b"])

    Raises:
        EmptyAddressError: If address is the empty string
    """
    if len(address) == 0:
        raise EmptyAddressError("failed to parse address. address is empty")
    return address.split(".")
