# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def assert_file_exists(path: Path, description: str = "") -> None:
    desc = f" ({description})" if description else ""
    assert path.is_file(), f"Expected file {path}{desc} to exist"


def assert_file_not_exists(path: Path, description: str = "") -> None:
    desc = f" ({description})" if description else ""
    assert not path.exists(), f"Expected {path}{desc} not to exist"


def assert_directory_exists(path: Path, description: str = "") -> None:
    desc = f" ({description})" if description else ""
    assert path.is_dir(), f"Expected directory {path}{desc} to exist"


def load_json_file(path: Path) -> dict[str, Any]:
    assert_file_exists(path)
    return json.loads(path.read_text())


def assert_json_content(path: Path, expected: dict[str, Any]) -> None:
    """Check that every expected key has the expected value."""
    content = load_json_file(path)
    for key, value in expected.items():
        assert key in content, f"Key '{key}' missing from {path.name}"
        assert content[key] == value, (
            f"{path.name}[{key!r}] is {content[key]!r}, expected {value!r}"
        )
