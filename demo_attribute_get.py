#!/usr/bin/env python3
"""
Demo: resolve a few addresses against the example Terraform document.

Shows how labels, repeated blocks and nested block types are addressed.
"""

import io

from hcledit.attribute_get import OutputFormat, get_attribute
from hcledit.examples import EXAMPLE_TERRAFORM


ADDRESSES = [
    "terraform.required_version",
    "terraform.backend.s3.bucket",
    "resource.aws_instance.web.ami",
    "resource.aws_instance.db.instance_type",
    "resource.aws_instance.web.provisioner.local-exec.command",
    "locals.env",
    "locals.region",
    "resource.aws_instance.missing",
]


def main():
    print("=" * 80)
    print("ATTRIBUTE GET DEMO")
    print("=" * 80)

    for address in ADDRESSES:
        out = io.StringIO()
        get_attribute(io.StringIO(EXAMPLE_TERRAFORM), out, "main.tf", address)
        value = out.getvalue().rstrip("\n") or "(not found)"
        print(f"  {address:60} {value}")

    print("\nAs HCL:")
    out = io.StringIO()
    get_attribute(io.StringIO(EXAMPLE_TERRAFORM), out, "main.tf", "resource.aws_instance.web.tags", OutputFormat.HCL)
    print(out.getvalue())


if __name__ == "__main__":
    main()
