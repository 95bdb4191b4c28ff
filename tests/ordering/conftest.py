import pytest


@pytest.fixture(autouse=True)
def _ctx(nested_contexts, ordering_bed):
    with nested_contexts(ordering_bed):
        yield
