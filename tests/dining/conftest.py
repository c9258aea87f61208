import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def dining_bed():
    from dining.domain import dining

    bed = DomainFixture(dining)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def setup_db(dining_bed):
    from dining.domain import dining
    from dining.utils.db import drop_db, setup_db

    setup_db(dining)

    yield

    drop_db(dining)


@pytest.fixture(autouse=True)
def _ctx(dining_bed):
    with dining_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Clear stores after every test, while the dining context is still active."""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


@pytest.fixture()
def register_restaurant():
    """Factory registering a restaurant through its command; approved by default."""
    from protean import current_domain

    from dining.restaurant.registration import RegisterRestaurant

    def _register(name="Casa Lola", category="Tapas", approved=True, **overrides):
        return current_domain.process(
            RegisterRestaurant(
                name=name,
                category=category,
                description=overrides.pop("description", "Small plates and natural wine"),
                registered_by_admin=approved,
                **overrides,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def restaurant_id(register_restaurant):
    return register_restaurant()
