from contextlib import ExitStack
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--db",
        action="store",
        default="memory",
        choices=["memory", "sqlite"],
        help="Database provider to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def settings(request, tmp_path_factory):
    from shared.config import Settings

    if request.config.getoption("--db") == "sqlite":
        database_url = f"sqlite:///{tmp_path_factory.mktemp('db') / 'sweetshop.db'}"
    else:
        database_url = "memory://"

    return Settings(_env_file=None, env="test", database_url=database_url, admin_token=None)


def _bed(domain, settings):
    from shared.database import configure_domain

    configure_domain(domain, settings)
    bed = DomainFixture(domain)
    bed.setup()
    return bed


@pytest.fixture(scope="session")
def identity_bed(settings):
    from identity.domain import identity

    bed = _bed(identity, settings)
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed(settings):
    from ordering.domain import ordering

    bed = _bed(ordering, settings)
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def content_bed(settings):
    from content.domain import content

    bed = _bed(content, settings)
    yield bed
    bed.teardown()


@pytest.fixture
def nested_contexts(identity_bed, ordering_bed, content_bed):
    """Enter every domain's test context, the given one innermost.

    Each context clears its domain's data on exit.
    """

    def enter(innermost):
        beds = [identity_bed, ordering_bed, content_bed]
        beds.sort(key=lambda bed: bed is innermost)
        stack = ExitStack()
        for bed in beds:
            stack.enter_context(bed.domain_context())
        return stack

    return enter


@pytest.fixture(autouse=True)
def _ctx(nested_contexts, content_bed):
    with nested_contexts(content_bed):
        yield


@pytest.fixture(scope="session")
def app(settings, identity_bed, ordering_bed, content_bed):
    from app import create_app

    return create_app(settings=settings, init_domains=False)


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
