"""End-to-end scenarios through the ReviewRegistry service."""

import pytest
import structlog
from review_registry.collaborators.port import FeeDebit
from review_registry.results import RegistryError
from review_registry.service import ReviewRegistry, get_registry_service

DEPLOYER = "ST1TEST"
AUTHORITY = "ST2TEST"


@pytest.fixture()
def service(registry_service, token_oracle, business_directory):
    business_directory.register(1)
    return registry_service


class TestServiceAccessor:
    def test_process_wide_instance(self):
        assert isinstance(get_registry_service(), ReviewRegistry)
        assert get_registry_service() is get_registry_service()


class TestLogContext:
    def test_caller_context_survives_operations(self, service):
        structlog.contextvars.bind_contextvars(request_id="req-42")
        try:
            service.set_authority_contract(DEPLOYER, AUTHORITY)
            service.submit_review(DEPLOYER, 1, 1, 4, "")

            assert structlog.contextvars.get_contextvars() == {"request_id": "req-42"}
        finally:
            structlog.contextvars.clear_contextvars()


class TestReferenceScenarios:
    def test_submits_a_review(self, service, token_oracle, fee_ledger):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)

        result = service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        assert result.ok
        assert result.value == 0
        review = service.get_review(0)
        assert review.rating.score == 4
        assert review.comment == "Great service"
        assert fee_ledger.debits == [FeeDebit(amount=10, sender=DEPLOYER, recipient=AUTHORITY)]

    def test_rejects_duplicate_review_for_same_purchase(self, service, token_oracle):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        result = service.submit_review(DEPLOYER, 1, 1, 5, "Updated")

        assert result.error == RegistryError.PURCHASE_TOKEN_ALREADY_USED
        assert result.error.code == 111

    def test_updates_a_review(self, service, token_oracle):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        result = service.update_review(DEPLOYER, 0, 5, "Excellent")

        assert result.ok
        review = service.get_review(0)
        assert review.rating.score == 5
        assert review.comment == "Excellent"

    def test_rejects_update_by_non_reviewer(self, service, token_oracle):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        result = service.update_review("ST3FAKE", 0, 5, "Excellent")

        assert result.error == RegistryError.NOT_AUTHORIZED
        assert result.error.code == 100

    def test_checks_review_existence(self, service, token_oracle):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        assert service.check_review_existence(1) is False

        service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        assert service.check_review_existence(1) is True
        assert service.check_review_existence(2) is False

    def test_rejects_submission_without_authority(self, service, token_oracle):
        token_oracle.issue(1, DEPLOYER)
        result = service.submit_review(DEPLOYER, 1, 1, 4, "Great service")
        assert result.error == RegistryError.NOT_AUTHORIZED

    def test_rejects_when_business_cap_reached(self, service, token_oracle, monkeypatch):
        monkeypatch.setenv("REGISTRY_MAX_REVIEWS_PER_BUSINESS", "1")
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        token_oracle.issue(2, DEPLOYER)

        first = service.submit_review(DEPLOYER, 1, 1, 4, "Great service")
        assert first.value == 0
        assert service.get_business_rating(1).average_rating == 4

        second = service.submit_review(DEPLOYER, 2, 1, 5, "Excellent")
        assert second.error == RegistryError.MAX_REVIEWS_EXCEEDED
        assert second.error.code == 114

    def test_fee_change_applies_to_next_debit(self, service, token_oracle, fee_ledger):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        assert service.set_review_fee(DEPLOYER, 20).ok
        assert service.get_registry_settings().review_fee == 20

        token_oracle.issue(1, DEPLOYER)
        service.submit_review(DEPLOYER, 1, 1, 4, "Great service")

        assert fee_ledger.debits == [FeeDebit(amount=20, sender=DEPLOYER, recipient=AUTHORITY)]

    def test_average_follows_update(self, service, token_oracle):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        token_oracle.issue(1, DEPLOYER)
        service.submit_review(DEPLOYER, 1, 1, 4, "Good")
        assert service.get_business_rating(1).average_rating == 4

        service.update_review(DEPLOYER, 0, 5, "Better than I thought")

        summary = service.get_business_rating(1)
        assert summary.average_rating == 5
        assert summary.review_count == 1


class TestRegistryProperties:
    @pytest.fixture()
    def many_reviewers(self, service, token_oracle, business_directory):
        service.set_authority_contract(DEPLOYER, AUTHORITY)
        business_directory.register(2)
        for token_id in range(10):
            token_oracle.issue(token_id, f"ST-REVIEWER-{token_id}")
        return service

    def test_ids_are_gap_free(self, many_reviewers):
        ids = []
        for token_id in range(10):
            if token_id % 3 == 0:
                # Rejected submissions consume no id
                many_reviewers.submit_review(f"ST-REVIEWER-{token_id}", token_id, 1, 0, "bad rating")
            result = many_reviewers.submit_review(f"ST-REVIEWER-{token_id}", token_id, 1 + token_id % 2, 3, "")
            ids.append(result.value)

        assert ids == list(range(10))
        assert many_reviewers.get_review_count() == 10

    def test_average_is_floor_of_current_ratings(self, many_reviewers):
        ratings = {}
        for token_id, rating in enumerate([2, 3, 5, 5, 5, 1, 4, 2, 5, 3]):
            result = many_reviewers.submit_review(f"ST-REVIEWER-{token_id}", token_id, 1, rating, "")
            ratings[result.value] = rating

        for review_id, new_rating in [(0, 5), (5, 2), (2, 1), (0, 4)]:
            assert many_reviewers.update_review(f"ST-REVIEWER-{review_id}", review_id, new_rating, "").ok
            ratings[review_id] = new_rating

        summary = many_reviewers.get_business_rating(1)
        assert summary.review_count == len(ratings)
        assert summary.average_rating == sum(ratings.values()) // len(ratings)

    def test_token_consumed_once_across_businesses_and_callers(self, many_reviewers, token_oracle):
        assert many_reviewers.submit_review("ST-REVIEWER-0", 0, 1, 4, "").ok
        token_oracle.issue(0, "ST-REVIEWER-1")

        result = many_reviewers.submit_review("ST-REVIEWER-1", 0, 2, 4, "")

        assert result.error == RegistryError.PURCHASE_TOKEN_ALREADY_USED
        assert many_reviewers.check_review_existence(0) is True

    def test_one_review_per_reviewer_per_business(self, many_reviewers, token_oracle):
        token_oracle.issue(100, "ST-REVIEWER-0")
        assert many_reviewers.submit_review("ST-REVIEWER-0", 0, 1, 4, "").ok

        result = many_reviewers.submit_review("ST-REVIEWER-0", 100, 1, 2, "")
        assert result.error == RegistryError.REVIEW_ALREADY_EXISTS

        # Another business is fine
        assert many_reviewers.submit_review("ST-REVIEWER-0", 100, 2, 2, "").ok

    def test_update_preserves_count(self, many_reviewers):
        many_reviewers.submit_review("ST-REVIEWER-0", 0, 1, 4, "")
        many_reviewers.submit_review("ST-REVIEWER-1", 1, 1, 2, "")

        many_reviewers.update_review("ST-REVIEWER-1", 1, 5, "")

        assert many_reviewers.get_business_rating(1).review_count == 2
        assert many_reviewers.get_review_count() == 2

    def test_update_record_exposed(self, many_reviewers):
        many_reviewers.submit_review("ST-REVIEWER-0", 0, 1, 4, "")
        assert many_reviewers.get_review_update(0) is None

        many_reviewers.update_review("ST-REVIEWER-0", 0, 2, "meh", block_height=40)

        update = many_reviewers.get_review_update(0)
        assert update.updated_rating == 2
        assert update.updated_at == 40

    def test_unknown_review_is_none(self, service):
        assert service.get_review(123) is None

    def test_unknown_business_has_empty_summary(self, service):
        summary = service.get_business_rating(999)
        assert summary.review_count == 0
        assert summary.average_rating == 0
