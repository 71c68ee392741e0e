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

import json
import re
import unicodedata
from pathlib import Path
from typing import Any

from fleetbase_cli.constants import (
    DEFAULT_AUTHOR_SLUG,
    ENGINE_SUFFIX,
    NAMESPACE_ROOT,
    ORG_SUFFIX_PATTERN,
)
from fleetbase_cli.exceptions import InvalidInputError
from fleetbase_cli.types import ExtensionIdentity

# Runs of letters and digits in any script; "_" separates
RUN_REGEX = re.compile(r"[^\W_]+")
# "1st", "22nd", "4TH"; "11th" is "11" + "th"
ORDINAL_REGEX = re.compile(
    r"\d*(?:1st|2nd|3rd|(?![123])\dth|1ST|2ND|3RD|(?![123])\dTH)"
)
APOSTROPHE_REGEX = re.compile(r"['’]")
ORG_SUFFIX_REGEX = re.compile(ORG_SUFFIX_PATTERN, re.IGNORECASE)
NAMESPACE_SEPARATOR = "\\"


def read_json(path: Path) -> dict[str, Any] | None:
    path = Path(path)
    if not path.is_file():
        return None

    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data: dict[str, Any]) -> None:
    Path(path).write_text(
        json.dumps(data, indent=4, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def expand_path(path: str | Path) -> Path:
    """Expand a leading `~` and make the path absolute."""
    return Path(path).expanduser().resolve()


def _fold(char: str) -> str:
    """Fold an accented Latin letter to its ASCII base (e.g., 'é' -> 'e')."""
    if unicodedata.combining(char):
        return ""
    ascii_part = (
        unicodedata.normalize("NFKD", char).encode("ascii", "ignore").decode("ascii")
    )
    return ascii_part or char


def _split_case(text: str) -> list[str]:
    """
    Split a run of letters on case changes.

    An uppercase run followed by a lowercase letter keeps its last capital
    for the next word ("XMLHttp" -> ["XML", "Http"]). Letters without case
    count as lowercase.
    """
    words = []
    start = 0
    for i in range(1, len(text)):
        prev, char = text[i - 1], text[i]
        if char.isupper():
            if not prev.isupper():
                words.append(text[start:i])
                start = i
        elif prev.isupper() and i - 2 >= start and text[i - 2].isupper():
            words.append(text[start : i - 1])
            start = i - 1
    words.append(text[start:])
    return words


def _split_run(run: str) -> list[str]:
    """Split an alphanumeric run into digit words, ordinals and letter words."""
    words: list[str] = []
    i = 0
    while i < len(run):
        if run[i].isdigit():
            ordinal = ORDINAL_REGEX.match(run, i)
            if ordinal:
                end = ordinal.end()
                follower = run[end] if end < len(run) else ""
                suffix_upper = run[end - 1].isupper()
                if not follower or not (
                    follower.isdigit() or follower.isupper() == suffix_upper
                ):
                    words.append(ordinal.group())
                    i = end
                    continue
            end = i
            while end < len(run) and run[end].isdigit():
                end += 1
        else:
            end = i
            while end < len(run) and not run[end].isdigit():
                end += 1
        chunk = run[i:end]
        words.extend([chunk] if chunk[0].isdigit() else _split_case(chunk))
        i = end
    return words


def _words(value: str) -> list[str]:
    """
    Split free text into words on separators, case changes and digits.

    Non-Latin letters are kept as they are; accented Latin letters are
    folded to ASCII.

    Args:
        value: Raw text (e.g., "Order-Tracker API")

    Returns:
        Word list (e.g., ["Order", "Tracker", "API"])
    """
    folded = "".join(_fold(char) for char in unicodedata.normalize("NFC", value))

    # Apostrophes join rather than split ("Bob's" -> "Bobs")
    folded = APOSTROPHE_REGEX.sub("", folded)

    return [
        word for run in RUN_REGEX.findall(folded) for word in _split_run(run)
    ]


def kebab_case(value: str) -> str:
    """Convert text to kebab-case (e.g., 'My Cool Extension' -> 'my-cool-extension')."""
    return "-".join(word.lower() for word in _words(value))


def start_case(value: str) -> str:
    """Capitalize every word (e.g., 'order-tracker' -> 'Order Tracker')."""
    return " ".join(word[0].upper() + word[1:] for word in _words(value))


def pascal_case(value: str) -> str:
    """Start case with whitespace removed (e.g., 'order tracker' -> 'OrderTracker')."""
    return start_case(value).replace(" ", "")


def camel_case(value: str) -> str:
    """Convert text to camelCase (e.g., 'Order Tracker' -> 'orderTracker')."""
    words = [word.lower() for word in _words(value)]
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def strip_org_suffixes(author: str) -> str:
    """
    Remove organizational entity suffixes from an author name.

    Args:
        author: Author or company name (e.g., "Acme Inc")

    Returns:
        Name without suffixes (e.g., "Acme")
    """
    return ORG_SUFFIX_REGEX.sub("", author).strip()


def derive_extension_identity(
    display_name: str,
    author: str | None = None,
    namespace: str | None = None,
) -> ExtensionIdentity:
    """
    Derive every naming variant of an extension.

    Args:
        display_name: Human-readable name (e.g., "Order Tracker")
        author: Author or organization name, or None for the default vendor
        namespace: PHP namespace segment override, or None to use the name

    Returns:
        ExtensionIdentity: Dictionary with all name variants

    Raises:
        InvalidInputError: If the name is empty or has no usable characters
    """
    if not display_name or not display_name.strip():
        raise InvalidInputError("Extension name cannot be empty")

    display_name = " ".join(display_name.split())
    slug = kebab_case(display_name)
    if not slug:
        raise InvalidInputError(
            "Extension name must contain at least one letter or number"
        )

    author_slug = kebab_case(strip_org_suffixes(author or "")) or DEFAULT_AUTHOR_SLUG

    class_name = pascal_case(display_name) + ENGINE_SUFFIX
    namespace_segment = pascal_case((namespace or "").strip() or display_name)
    full_namespace = f"{NAMESPACE_ROOT}{NAMESPACE_SEPARATOR}{namespace_segment}"
    type_name = upper_first(camel_case(full_namespace.split(NAMESPACE_SEPARATOR)[-1]))

    return ExtensionIdentity(
        display_name=display_name,
        slug=slug,
        class_name=class_name,
        route=kebab_case(class_name.removesuffix(ENGINE_SUFFIX)),
        namespace_segment=namespace_segment,
        namespace=full_namespace,
        type_name=type_name,
        author_slug=author_slug,
        package_name=f"@{author_slug}/{slug}-engine",
        composer_name=f"{author_slug}/{slug}-api",
    )
