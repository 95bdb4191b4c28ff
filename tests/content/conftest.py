import pytest


@pytest.fixture(autouse=True)
def _ctx(nested_contexts, content_bed):
    with nested_contexts(content_bed):
        yield
