"""
Address Resolver — maps a dotted address onto a schemaless document.

Given the address A.B.C, the user knows whether B is a label or a nested
block type, but the document has no schema to tell us. We rely on a
heuristic instead of new address syntax:

    - Labels take precedence over nested blocks. Within a block type the
      number of labels is assumed not to change, only their values, so a
      block whose labels only partially match the address is discarded.
    - Once all of a block's labels are consumed (or it has none), the rest
      of the address is searched for among its nested blocks.
    - If a segment is both a label and a nested block type, write it twice
      (A.B.B.C).

IMPORTANT: This module never modifies the document.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from hcledit.address import EmptyAddressError, parse_address
from hcledit.model import Attribute, Block, Body

logger = logging.getLogger(__name__)


def all_matching_blocks_by_type(body: Body, type_name: str) -> List[Block]:
    """
    Return every direct child block of `body` with the given type, in
    document order, ignoring label differences.
    """
    return [block for block in body.blocks() if block.type == type_name]


def longest_matching_labels(labels: Sequence[str], prefix: Sequence[str]) -> List[str]:
    """
    Return the leading part of `labels` that equals the start of `prefix`.

    Comparison stops at the first mismatch or when either sequence runs
    out. Returns an empty list if nothing matches.
    """
    matched: List[str] = []
    for label, segment in zip(labels, prefix):
        if label != segment:
            break
        matched.append(label)
    return matched


def find_longest_matching_blocks(body: Body, address: Sequence[str]) -> List[Block]:
    """
    Return all blocks that match a block address.

    Args:
        body: Body to search
        address: Block address segments. The first segment is a block
            type; the rest are labels, nested block types or a mix.

    Returns:
        Matching blocks in document order. A single segment matches every
        block of that type regardless of labels.

    Raises:
        EmptyAddressError: If address has no segments

    An empty segment, as in `a..b`, is a block type no block has, so it
    matches nothing instead of raising EmptyAddressError. Only an empty
    segment list raises.
    """
    if len(address) == 0:
        raise EmptyAddressError("failed to parse address. address is empty")

    type_name = address[0]
    candidates = all_matching_blocks_by_type(body, type_name)
    logger.debug("address %s: %d block(s) of type %r", ".".join(address), len(candidates), type_name)

    if len(address) == 1:
        return candidates

    remaining = address[1:]
    matched: List[Block] = []
    for block in candidates:
        matched_labels = longest_matching_labels(block.labels, remaining)

        if len(matched_labels) < len(block.labels):
            # Extra labels remain: labels win over nested blocks, skip it
            logger.debug("skip %s %s: labels do not match %s", block.type, block.labels, remaining)
            continue

        if len(matched_labels) < len(remaining) or len(block.labels) == 0:
            nested_address = remaining[len(matched_labels):]
            logger.debug("descend into %s %s with %s", block.type, block.labels, nested_address)
            matched.extend(find_longest_matching_blocks(block.body, nested_address))
            continue

        matched.append(block)

    return matched


def find_attribute(body: Body, address: str) -> Tuple[Optional[Attribute], Optional[Body]]:
    """
    Return the first attribute found at an address, and the body holding it.

    Without dots the address is an attribute name looked up in `body`
    itself. Otherwise the last segment is the attribute name and the rest
    is a block address resolved by `find_longest_matching_blocks`; matched
    blocks are searched in order and the first one defining the attribute
    wins.

    Returns:
        (attribute, owning body). Not found is not an error: the result is
        (None, body) for a plain name and (None, None) for a dotted address.

    Raises:
        EmptyAddressError: If address is empty
    """
    segments = parse_address(address)
    if len(segments) == 1:
        return body.get_attribute(segments[0]), body

    attr_name = segments[-1]
    blocks = find_longest_matching_blocks(body, segments[:-1])
    if not blocks:
        return None, None

    for block in blocks:
        attr = block.body.get_attribute(attr_name)
        if attr is not None:
            return attr, block.body

    logger.debug("no attribute %r in %d matched block(s)", attr_name, len(blocks))
    return None, None
