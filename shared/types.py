# Copyright 2025 Google LLC
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
# ==============================================================================

from dataclasses import dataclass
from typing import Any, Mapping, Optional

CLASS_RECORD_FIELDS = ("index", "name", "url")


@dataclass
class ClassRecord:
    """A character class as known locally, keyed by the upstream index."""

    index: str
    name: str
    url: str
    created_at: Optional[float] = None
    updated_at: Optional[float] = None

    def as_dict(self) -> dict:
        return {"index": self.index, "name": self.name, "url": self.url}

    def as_row_dict(self) -> dict:
        return {
            **self.as_dict(),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _field_as_str(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def class_record_from_dict(raw: Mapping[str, Any]) -> ClassRecord:
    """
    Builds a ClassRecord from an upstream class reference.

    Missing fields default to an empty string; this never raises on absent
    keys.

    Args:
        raw (Mapping): An item of the upstream "results" list, e.g.
            {"index": "wizard", "name": "Wizard", "url": "/api/classes/wizard"}.

    Returns:
        ClassRecord: The normalized record, without timestamps.
    """
    return ClassRecord(**{key: _field_as_str(raw, key) for key in CLASS_RECORD_FIELDS})
