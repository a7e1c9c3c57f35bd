"""
Serialization helpers for lookup results.

Renders the outcome of an attribute lookup as JSON or YAML via an
intermediate dict. The value stays raw HCL text: quotes are part of it.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml


def result_to_dict(address: str, value: str | None) -> Dict[str, Any]:
    return {"address": address, "value": value}


def result_to_json(address: str, value: str | None) -> str:
    return json.dumps(result_to_dict(address, value), sort_keys=True)


def result_to_yaml(address: str, value: str | None) -> str:
    return yaml.safe_dump(result_to_dict(address, value))
