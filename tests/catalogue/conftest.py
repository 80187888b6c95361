import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
