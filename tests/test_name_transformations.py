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

import pytest

from fleetbase_cli.exceptions import InvalidInputError
from fleetbase_cli.utils import (
    camel_case,
    derive_extension_identity,
    kebab_case,
    pascal_case,
    start_case,
    strip_org_suffixes,
    upper_first,
)


# Case conversion tests


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("My Cool Extension", "my-cool-extension"),
        ("Order Tracker", "order-tracker"),
        ("OrderTracker", "order-tracker"),  # Case changes split words
        ("order_tracker", "order-tracker"),
        ("  Order   Tracker  ", "order-tracker"),  # Whitespace collapsed
        ("Hello@World!", "hello-world"),  # Punctuation separates
        ("XMLHttpRequest", "xml-http-request"),
        ("API v2 Client", "api-v-2-client"),  # Digits are their own word
        ("Bob's Shop", "bobs-shop"),  # Apostrophes dropped
        ("Café Orders", "cafe-orders"),  # Accents folded
        ("Заказы Tracker", "заказы-tracker"),  # Other scripts kept
        ("ЗаказыTracker", "заказы-tracker"),
        ("2nd Shift", "2nd-shift"),  # Ordinals stay whole
        ("21ST Century", "21st-century"),
        ("11th Hour", "11-th-hour"),
        ("2ndary", "2-ndary"),
        ("", ""),
    ],
)
def test_kebab_case(value, expected):
    assert kebab_case(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("order-tracker", "Order Tracker"),
        ("order tracker", "Order Tracker"),
        ("fooBar", "Foo Bar"),
        ("API client", "API Client"),  # Existing capitals kept
    ],
)
def test_start_case(value, expected):
    assert start_case(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("My Cool Extension", "MyCoolExtension"),
        ("order tracker", "OrderTracker"),
        ("OrderTracker", "OrderTracker"),
    ],
)
def test_pascal_case(value, expected):
    assert pascal_case(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Order Tracker", "orderTracker"),
        ("OrderTracker", "orderTracker"),
        ("order-tracker", "orderTracker"),
        ("FLEET OPS", "fleetOps"),
    ],
)
def test_camel_case(value, expected):
    assert camel_case(value) == expected


def test_upper_first():
    assert upper_first("orderTracker") == "OrderTracker"
    assert upper_first("") == ""


@pytest.mark.parametrize(
    ("author", "expected"),
    [
        ("Acme Inc", "Acme"),
        ("Acme LLC", "Acme"),
        ("Acme Pte Ltd", "Acme"),
        ("acme gmbh", "acme"),
        ("Acme Corp", "Acme"),
        ("Acme Limited", "Acme"),
        ("Incredible Apps", "Incredible Apps"),  # Whole words only
        ("Jane Doe", "Jane Doe"),
        ("", ""),
    ],
)
def test_strip_org_suffixes(author, expected):
    assert strip_org_suffixes(author) == expected


# Identity derivation tests


@pytest.mark.unit
def test_derive_extension_identity():
    identity = derive_extension_identity("Order Tracker", "Acme Inc")

    assert identity == {
        "display_name": "Order Tracker",
        "slug": "order-tracker",
        "class_name": "OrderTrackerEngine",
        "route": "order-tracker",
        "namespace_segment": "OrderTracker",
        "namespace": "Fleetbase\\OrderTracker",
        "type_name": "OrderTracker",
        "author_slug": "acme",
        "package_name": "@acme/order-tracker-engine",
        "composer_name": "acme/order-tracker-api",
    }


@pytest.mark.unit
def test_derive_extension_identity_is_deterministic():
    first = derive_extension_identity("My Cool Extension", "Jane Doe", "Cool")
    second = derive_extension_identity("My Cool Extension", "Jane Doe", "Cool")

    assert first == second


@pytest.mark.unit
def test_derive_extension_identity_class_name():
    identity = derive_extension_identity("My Cool Extension")

    assert identity["slug"] == "my-cool-extension"
    assert identity["class_name"] == "MyCoolExtensionEngine"


@pytest.mark.unit
@pytest.mark.parametrize("author", [None, "", "   ", "Inc"])
def test_derive_extension_identity_default_author(author):
    identity = derive_extension_identity("Order Tracker", author)

    assert identity["author_slug"] == "fleetbase"
    assert identity["package_name"] == "@fleetbase/order-tracker-engine"
    assert identity["composer_name"] == "fleetbase/order-tracker-api"


@pytest.mark.unit
def test_derive_extension_identity_namespace_override():
    identity = derive_extension_identity("Order Tracker", "Acme", "shipment tools")

    assert identity["namespace_segment"] == "ShipmentTools"
    assert identity["namespace"] == "Fleetbase\\ShipmentTools"
    assert identity["type_name"] == "ShipmentTools"
    # Names that do not depend on the namespace are unaffected
    assert identity["class_name"] == "OrderTrackerEngine"
    assert identity["slug"] == "order-tracker"


@pytest.mark.unit
def test_derive_extension_identity_blank_namespace_uses_name():
    identity = derive_extension_identity("Order Tracker", namespace="  ")

    assert identity["namespace"] == "Fleetbase\\OrderTracker"


@pytest.mark.unit
def test_derive_extension_identity_normalizes_display_name():
    identity = derive_extension_identity("  Order    Tracker ")

    assert identity["display_name"] == "Order Tracker"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "error_match"),
    [
        ("", "cannot be empty"),
        ("   ", "cannot be empty"),
        ("!!!", "at least one letter or number"),
    ],
)
def test_derive_extension_identity_invalid(name, error_match):
    with pytest.raises(InvalidInputError, match=error_match):
        derive_extension_identity(name)


@pytest.mark.unit
def test_derive_extension_identity_non_latin_name():
    identity = derive_extension_identity("Заказы Tracker")

    assert identity["slug"] == "заказы-tracker"
    assert identity["class_name"] == "ЗаказыTrackerEngine"
    assert identity["namespace"] == "Fleetbase\\ЗаказыTracker"


@pytest.mark.unit
def test_derive_extension_identity_accepts_purely_non_latin_name():
    identity = derive_extension_identity("Заказы")

    assert identity["slug"] == "заказы"
    assert identity["type_name"] == "Заказы"
