import pytest


@pytest.fixture(autouse=True)
def _ctx(nested_contexts, identity_bed):
    with nested_contexts(identity_bed):
        yield
