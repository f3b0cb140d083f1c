"""
Tests for checkout metadata classification.
"""
import pytest

from studiofinder.core.config import Settings
from studiofinder.core.membership_terms import MembershipTerms
from studiofinder.services.metadata_classifier import (
    FeaturedUpgradeMetadata,
    InvalidRenewalTypeError,
    MembershipIntent,
    MissingRequiredFieldError,
    UnknownPurposeError,
    classify_metadata,
)


def _bag(**overrides):
    bag = {
        "user_id": "user_123",
        "user_email": "owner@example.com",
        "purpose": "membership",
    }
    bag.update(overrides)
    return bag


class TestMembership:
    def test_five_year_renewal_credits_sixty_months(self):
        result = classify_metadata(
            _bag(purpose="membership_renewal", renewal_type="5year", current_expiry="2026-03-01T00:00:00.000Z")
        )

        assert isinstance(result, MembershipIntent)
        assert result.config.is_renewal is True
        assert result.config.membership_months == 60
        assert result.kind == "renewal"
        assert result.metadata.current_expiry == "2026-03-01T00:00:00.000Z"

    def test_new_membership_gets_default_term(self):
        terms = MembershipTerms()
        result = classify_metadata(_bag(), terms=terms)

        assert isinstance(result, MembershipIntent)
        assert result.config.is_renewal is False
        assert result.config.membership_months == terms.new_membership_months
        assert result.kind == "new_membership"

    @pytest.mark.parametrize(
        "renewal_type, months",
        [("early", 13), ("standard", 12), ("5year", 60)],
    )
    def test_renewal_month_table(self, renewal_type, months):
        result = classify_metadata(_bag(purpose="membership_renewal", renewal_type=renewal_type))

        assert result.config.membership_months == months
        assert result.metadata.renewal_type == renewal_type

    def test_renewal_without_tier_is_standard(self):
        result = classify_metadata(_bag(purpose="membership_renewal"))

        assert result.config.membership_months == 12

    def test_new_membership_ignores_renewal_fields(self):
        result = classify_metadata(_bag(renewal_type="early", current_expiry="2026-01-01T00:00:00Z"))

        assert result.config.membership_months == 12
        assert result.metadata.renewal_type is None
        assert result.metadata.current_expiry is None

    def test_configured_terms_are_used(self):
        terms = MembershipTerms.from_settings(
            Settings(
                membership_new_term_months=6,
                membership_early_renewal_months=14,
                membership_standard_renewal_months=11,
            )
        )

        assert classify_metadata(_bag(), terms=terms).config.membership_months == 6
        early = classify_metadata(_bag(purpose="membership_renewal", renewal_type="early"), terms=terms)
        assert early.config.membership_months == 14
        standard = classify_metadata(_bag(purpose="membership_renewal", renewal_type="standard"), terms=terms)
        assert standard.config.membership_months == 11
        # 5-year stays fixed
        five = classify_metadata(_bag(purpose="membership_renewal", renewal_type="5year"), terms=terms)
        assert five.config.membership_months == 60

    def test_values_are_trimmed(self):
        result = classify_metadata(_bag(user_id="  user_9 ", user_email=" a@b.co ", user_name="  Sam  "))

        assert result.metadata.user_id == "user_9"
        assert result.metadata.user_email == "a@b.co"
        assert result.metadata.user_name == "Sam"


class TestCoupon:
    def test_coupon_passed_through_trimmed(self):
        result = classify_metadata(_bag(coupon_code="  SPRING25 "))
        assert result.config.coupon_code == "SPRING25"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_coupon_is_none(self, raw):
        result = classify_metadata(_bag(coupon_code=raw))
        assert result.config.coupon_code is None

    def test_absent_coupon_is_none(self):
        assert classify_metadata(_bag()).config.coupon_code is None


class TestFeaturedUpgrade:
    def test_routes_to_featured_upgrade(self):
        result = classify_metadata(_bag(purpose="featured_upgrade", studio_id="studio_42"))

        assert result == FeaturedUpgradeMetadata(
            user_id="user_123",
            user_email="owner@example.com",
            studio_id="studio_42",
        )
        assert result.purpose == "featured_upgrade"

    def test_requires_studio_id(self):
        result = classify_metadata(_bag(purpose="featured_upgrade"))

        assert result == MissingRequiredFieldError(field="studio_id")


class TestFailures:
    @pytest.mark.parametrize("purpose", ["membership", "membership_renewal", "featured_upgrade", "bogus", None])
    @pytest.mark.parametrize("field", ["user_id", "user_email"])
    def test_missing_required_field_regardless_of_purpose(self, purpose, field):
        bag = _bag(purpose=purpose, studio_id="studio_1")
        del bag[field]

        result = classify_metadata(bag)

        assert isinstance(result, MissingRequiredFieldError)
        assert result.field == field
        assert result.code == "missing_required_field"

    def test_whitespace_only_required_field_is_missing(self):
        result = classify_metadata(_bag(user_email="   "))
        assert result == MissingRequiredFieldError(field="user_email")

    @pytest.mark.parametrize("purpose", [None, "", "subscription", "FEATURED_UPGRADE"])
    def test_unknown_purpose(self, purpose):
        result = classify_metadata(_bag(purpose=purpose))

        assert isinstance(result, UnknownPurposeError)
        assert result.code == "unknown_purpose"

    def test_missing_purpose_message(self):
        bag = _bag()
        del bag["purpose"]

        result = classify_metadata(bag)

        assert result == UnknownPurposeError(purpose=None)
        assert result.message == "metadata has no purpose"

    @pytest.mark.parametrize("purpose", ["membership", "membership_renewal"])
    @pytest.mark.parametrize("renewal_type", ["10year", "EARLY", "monthly"])
    def test_invalid_renewal_type(self, purpose, renewal_type):
        result = classify_metadata(_bag(purpose=purpose, renewal_type=renewal_type))

        assert result == InvalidRenewalTypeError(renewal_type=renewal_type)
        assert renewal_type in result.message


def test_explicit_purpose_overrides_bag():
    result = classify_metadata(_bag(purpose="membership"), "membership_renewal")

    assert result.config.is_renewal is True


def test_classification_is_repeatable():
    bag = _bag(purpose="membership_renewal", renewal_type="early", coupon_code="X1")

    assert classify_metadata(bag) == classify_metadata(bag)
    assert classify_metadata({}) == classify_metadata({})
