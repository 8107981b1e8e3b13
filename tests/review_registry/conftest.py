import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def registry_bed():
    from review_registry.domain import registry

    bed = DomainFixture(registry)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(registry_bed):
    from review_registry.collaborators import reset_collaborators

    with registry_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_collaborators()


@pytest.fixture()
def token_oracle():
    from review_registry.collaborators import get_token_oracle

    return get_token_oracle()


@pytest.fixture()
def business_directory():
    from review_registry.collaborators import get_business_directory

    return get_business_directory()


@pytest.fixture()
def fee_ledger():
    from review_registry.collaborators import get_fee_ledger

    return get_fee_ledger()


@pytest.fixture()
def registry_service():
    from review_registry.service import ReviewRegistry

    return ReviewRegistry()
