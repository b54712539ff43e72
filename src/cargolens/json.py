# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Canonical JSON types and helpers used across cargolens.

This module has no dependencies on logging, configuration, or CLI layers to
keep the dependency graph simple and acyclic.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import cast

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "dump_json",
    "normalize_enums_for_json",
]

type JSONValue = str | int | float | bool | dict[str, JSONValue] | list[JSONValue] | None
type JSONMapping = dict[str, JSONValue]
type JSONList = list[JSONValue]


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their string payloads for JSON serialisation.

    Args:
        value: Arbitrary Python object hierarchy that may include `Enum`
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure (built from `dict`/`list`/primitives)
        with all enum keys and values replaced by their `.value` payloads.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, dict):
            mapping_obj = cast("dict[object, object]", obj)
            result: dict[str, JSONValue] = {}
            for key, raw_val in mapping_obj.items():
                if isinstance(key, Enum):
                    norm_key: str = str(key.value)
                elif isinstance(key, str):
                    norm_key = key
                else:
                    norm_key = str(key)
                result[norm_key] = _convert(raw_val)
            return cast("JSONValue", result)
        if isinstance(obj, list | tuple):
            sequence_obj = cast("list[object] | tuple[object, ...]", obj)
            return cast("JSONValue", [_convert(item) for item in sequence_obj])
        if isinstance(obj, str | int | float | bool) or obj is None:
            return cast("JSONValue", obj)
        return cast("JSONValue", str(obj))

    return _convert(value)


def dump_json(value: object, *, indent: int = 2) -> str:
    """Serialise ``value`` (after enum normalisation) as pretty-printed JSON."""
    return json.dumps(normalize_enums_for_json(value), indent=indent, ensure_ascii=False)
