import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def store_bed():
    from store.domain import store

    bed = DomainFixture(store)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(store_bed):
    with store_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def seed_product():
    """Put a product on the Store's price list, as the Catalogue events would."""
    from protean import current_domain
    from store.pricing.product_price import ProductPrice

    def _seed(product_id, price, is_active=True, product_type="Game", game_id=None, title=None):
        current_domain.repository_for(ProductPrice).add(
            ProductPrice(
                product_id=product_id,
                title=title or f"Product {product_id}",
                product_type=product_type,
                game_id=game_id,
                price=price,
                is_active=is_active,
            )
        )
        return product_id

    return _seed


@pytest.fixture()
def fake_gateway():
    from store.gateway import reset_gateway, set_gateway
    from store.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    yield gateway
    reset_gateway()
