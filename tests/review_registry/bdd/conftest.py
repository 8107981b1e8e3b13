"""Shared BDD fixtures and step definitions for the Review Registry."""

import pytest
from pytest_bdd import given, parsers, then
from review_registry.collaborators.port import FeeDebit


@pytest.fixture()
def outcome():
    """Container for the most recent operation result."""
    return {"result": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("business {business_id:d} is registered"))
def business_registered(business_directory, business_id):
    business_directory.register(business_id)


@given(parsers.cfparse('purchase token {token_id:d} is owned by "{owner}"'))
def token_owned(token_oracle, token_id, owner):
    token_oracle.issue(token_id, owner)


@given(parsers.cfparse('the authority is "{authority}"'))
def authority_set(registry_service, authority):
    assert registry_service.set_authority_contract("ST1TEST", authority).ok


@given(parsers.cfparse("the review fee is changed to {amount:d}"))
def fee_changed(registry_service, amount):
    assert registry_service.set_review_fee("ST1TEST", amount).ok


@given(parsers.cfparse('"{caller}" reviewed business {business_id:d} with token {token_id:d} and rating {rating:d}'))
def existing_review(registry_service, caller, business_id, token_id, rating):
    assert registry_service.submit_review(caller, token_id, business_id, rating, "Given review").ok


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('a fee of {amount:d} is debited from "{sender}" to "{recipient}"'))
def fee_debited(fee_ledger, amount, sender, recipient):
    assert fee_ledger.debits == [FeeDebit(amount=amount, sender=sender, recipient=recipient)]


@then(parsers.cfparse("business {business_id:d} has {count:d} review averaging {average:d}"))
def business_summary(registry_service, business_id, count, average):
    summary = registry_service.get_business_rating(business_id)
    assert summary.review_count == count
    assert summary.average_rating == average


@then(parsers.cfparse("token {token_id:d} has not been redeemed"))
def token_not_redeemed(registry_service, token_id):
    assert registry_service.check_review_existence(token_id) is False
