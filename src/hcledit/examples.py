"""
Example documents used by the demo and the tests.

`EXAMPLE_TERRAFORM` covers the shapes the resolver has to tell apart:
labeled blocks, repeated unlabeled blocks, nested block types and
trailing comments.
"""
from hcledit.model import Attribute, Block, Body, File
from hcledit.parser import parse_string
from hcledit.tokens import Token, TokenType


EXAMPLE_TERRAFORM = '''\
terraform {
  required_version = ">= 1.0" # pinned
  backend "s3" {
    bucket = "state-bucket"
    region = "us-east-1"
  }
}

provider "aws" {
  region = var.region
}

resource "aws_instance" "web" {
  ami           = "ami-123456"
  instance_type = "t3.micro"
  tags = {
    Name = "web"
  }

  provisioner "local-exec" {
    command = "echo ${self.private_ip}"
  }
}

resource "aws_instance" "db" {
  ami           = "ami-654321"
  instance_type = "t3.large"
}

locals {
  env = "dev"
}

locals {
  env    = "prod"
  region = "eu-west-1"
}
'''


def build_example_terraform_file() -> File:
    return parse_string(EXAMPLE_TERRAFORM, filename="main.tf")


def _attribute(name: str, value: str) -> Attribute:
    return Attribute(
        name=name,
        tokens=[
            Token(TokenType.IDENT, name),
            Token(TokenType.EQUAL, "=", " "),
            Token(TokenType.STRING, f'"{value}"', " "),
            Token(TokenType.NEWLINE, "\n"),
        ],
    )


def build_example_body(depth: int = 3) -> Body:
    """
    Build nested unlabeled blocks `level { level { ... } }` in memory.

    Each level holds `name = "level<i>"`, so `level.level.name` resolves
    to the second level. Written out, the blocks have no header tokens:
    this body is for resolution only.
    """
    body = Body()
    current = body
    for i in range(1, depth + 1):
        block = Block(type="level", body=Body([_attribute("name", f"level{i}")]))
        current.items.append(block)
        current = block.body
    return body
