from typing import Any

import pytest

from marketplace.content.models import SubmitObject
from tests.factories import make_raw_content, make_submit_object


@pytest.fixture()
def raw_content() -> dict[str, Any]:
    return make_raw_content()


@pytest.fixture()
def submit_object() -> SubmitObject:
    return make_submit_object()
