"""
Tests for address resolution.

These tests pin down the precedence order the resolver relies on:
    full label match > partial label match (discarded) >
    no labels or leftover segments (descend into nested blocks)
"""

import logging

import pytest

from hcledit.address import EmptyAddressError
from hcledit.examples import EXAMPLE_TERRAFORM, build_example_body, build_example_terraform_file
from hcledit.parser import parse_string
from hcledit.resolver import (
    all_matching_blocks_by_type,
    find_attribute,
    find_longest_matching_blocks,
    longest_matching_labels,
)
from hcledit.value import get_attribute_value_as_string


def value_at(src: str, address: str):
    attr, _ = find_attribute(parse_string(src).body, address)
    if attr is None:
        return None
    return get_attribute_value_as_string(attr)


class TestLongestMatchingLabels:
    """Test the label prefix matcher."""

    def test_full_match(self):
        """All labels equal the address start."""
        assert longest_matching_labels(["a", "b"], ["a", "b", "c"]) == ["a", "b"]

    def test_partial_match(self):
        """Stops at the first mismatch."""
        assert longest_matching_labels(["x", "y"], ["x", "z"]) == ["x"]

    def test_prefix_shorter_than_labels(self):
        """Stops when the address runs out."""
        assert longest_matching_labels(["a", "b"], ["a"]) == ["a"]

    def test_first_element_differs(self):
        """No common prefix gives an empty list."""
        assert longest_matching_labels(["a"], ["b"]) == []

    def test_no_labels(self):
        """A block without labels matches nothing."""
        assert longest_matching_labels([], ["a", "b"]) == []


class TestFindLongestMatchingBlocks:
    """Test block address resolution."""

    def test_empty_address_raises(self):
        """An empty block address is an error."""
        body = parse_string('a {\n}\n').body
        with pytest.raises(EmptyAddressError):
            find_longest_matching_blocks(body, [])

    def test_bare_type_matches_all_labels(self):
        """A single segment returns every block of that type, labels ignored."""
        body = parse_string('a "x" {\n}\nb {\n}\na "y" "z" {\n}\na {\n}\n').body
        blocks = find_longest_matching_blocks(body, ["a"])
        assert [b.labels for b in blocks] == [["x"], ["y", "z"], []]
        assert blocks == all_matching_blocks_by_type(body, "a")

    def test_full_label_match(self):
        """Labels that exactly consume the address make the block a match."""
        file = build_example_terraform_file()
        blocks = find_longest_matching_blocks(file.body, ["resource", "aws_instance", "db"])
        assert len(blocks) == 1
        assert blocks[0].labels == ["aws_instance", "db"]

    def test_partial_label_match_is_discarded(self):
        """A block whose labels only partly match is never searched further."""
        src = 'b "x" "y" {\n  z {\n    attr = 1\n  }\n}\n'
        body = parse_string(src).body
        assert find_longest_matching_blocks(body, ["b", "x", "z"]) == []
        assert find_attribute(body, "b.x.z.attr") == (None, None)

    def test_short_address_does_not_match_labeled_block(self):
        """An address shorter than the labels is a partial match too."""
        body = parse_string('b "x" "y" {\n  attr = 1\n}\n').body
        assert find_longest_matching_blocks(body, ["b", "x"]) == []

    def test_zero_label_block_descends(self):
        """A block without labels passes the rest of the address to its body."""
        src = 'outer {\n  child {\n    attr = "v"\n  }\n}\n'
        body = parse_string(src).body
        blocks = find_longest_matching_blocks(body, ["outer", "child"])
        assert len(blocks) == 1
        assert blocks[0].type == "child"
        assert value_at(src, "outer.child.attr") == '"v"'

    def test_leftover_segments_descend_after_labels(self):
        """After all labels are consumed, the rest names nested blocks."""
        file = build_example_terraform_file()
        blocks = find_longest_matching_blocks(
            file.body, ["resource", "aws_instance", "web", "provisioner", "local-exec"]
        )
        assert len(blocks) == 1
        assert blocks[0].type == "provisioner"

    def test_label_and_nested_type_with_same_name(self):
        """A segment that is both a label and a nested type is written twice."""
        src = 'a "x" {\n  attr = 2\n  x {\n    attr = 1\n  }\n}\n'
        assert value_at(src, "a.x.attr") == "2"
        assert value_at(src, "a.x.x.attr") == "1"

    def test_matches_keep_document_order(self):
        """Matches from several candidates are concatenated in order."""
        src = 'a {\n  b {\n    n = 1\n  }\n}\na {\n  b {\n    n = 2\n  }\n  b {\n    n = 3\n  }\n}\n'
        body = parse_string(src).body
        blocks = find_longest_matching_blocks(body, ["a", "b"])
        values = [get_attribute_value_as_string(b.body.get_attribute("n")) for b in blocks]
        assert values == ["1", "2", "3"]

    def test_empty_segment_matches_nothing(self):
        """An empty segment is a type name no block has: not found, no error."""
        body = parse_string('a {\n  b = 1\n}\n').body
        assert find_longest_matching_blocks(body, ["a", ""]) == []
        assert find_attribute(body, "a..b") == (None, None)

    def test_resolution_is_idempotent(self):
        """Resolving twice returns the same blocks."""
        file = build_example_terraform_file()
        first = find_longest_matching_blocks(file.body, ["locals"])
        second = find_longest_matching_blocks(file.body, ["locals"])
        assert len(first) == 2
        assert all(a is b for a, b in zip(first, second))

    def test_skip_is_logged(self, caplog):
        """Discarded blocks show up in debug logs."""
        caplog.set_level(logging.DEBUG, logger="hcledit.resolver")
        body = parse_string('b "x" "y" {\n}\n').body
        find_longest_matching_blocks(body, ["b", "x", "z"])
        assert "skip b" in caplog.text


class TestFindAttribute:
    """Test attribute lookup by full address."""

    def test_empty_address_raises(self):
        """Empty address fails before any traversal."""
        with pytest.raises(EmptyAddressError):
            find_attribute(parse_string("a = 1\n").body, "")

    def test_plain_name_looks_in_body(self):
        """Without dots the attribute is looked up in the body itself."""
        body = parse_string('a = 1\nb {\n  a = 2\n}\n').body
        attr, owner = find_attribute(body, "a")
        assert attr is body.get_attribute("a")
        assert owner is body

    def test_plain_name_not_found(self):
        """A missing top-level attribute returns the body, not an error."""
        body = parse_string("a = 1\n").body
        attr, owner = find_attribute(body, "missing")
        assert attr is None
        assert owner is body

    def test_first_matching_block_wins(self):
        """With duplicate blocks the first one holding the attribute wins."""
        src = 'a { b = "1" } a { b = "2" }'
        assert value_at(src, "a.b") == '"1"'

    def test_later_block_used_when_first_lacks_attribute(self):
        """Blocks without the attribute are skipped."""
        assert value_at(EXAMPLE_TERRAFORM, "locals.region") == '"eu-west-1"'

    def test_labeled_resource(self):
        """Type and labels address a resource attribute."""
        src = 'resource "aws_instance" "foo" { ami = "x" }\n'
        body = parse_string(src).body
        attr, owner = find_attribute(body, "resource.aws_instance.foo.ami")
        assert get_attribute_value_as_string(attr) == '"x"'
        assert owner is body.blocks()[0].body

    def test_missing_attribute_on_matched_block(self):
        """A matched block without the attribute gives not found."""
        src = 'resource "aws_instance" "foo" { ami = "x" }\n'
        body = parse_string(src).body
        assert find_attribute(body, "resource.aws_instance.foo.nope") == (None, None)

    def test_no_matching_block(self):
        """No matched block gives not found."""
        body = parse_string("a = 1\n").body
        assert find_attribute(body, "nope.a") == (None, None)

    def test_nested_unlabeled_levels(self):
        """Repeated type names walk down one level per segment."""
        body = build_example_body(depth=3)
        attr, _ = find_attribute(body, "level.level.name")
        assert get_attribute_value_as_string(attr) == '"level2"'

    def test_lookup_does_not_modify_document(self):
        """Resolution leaves the parsed tokens untouched."""
        file = build_example_terraform_file()
        before = file.body.build_tokens()
        find_attribute(file.body, "resource.aws_instance.web.ami")
        find_attribute(file.body, "terraform.backend.s3.bucket")
        assert file.body.build_tokens() == before

    def test_unicode_names(self):
        """Block types, labels and attribute names outside ASCII resolve."""
        body = parse_string('café crème {\n  ñame = "x"\n}\n').body
        attr, _ = find_attribute(body, "café.crème.ñame")
        assert get_attribute_value_as_string(attr) == '"x"'
