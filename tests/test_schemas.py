"""Tests for wire-format DTOs."""

from datetime import datetime, timezone

import pytest
from conftest import (
    USER_ID,
    WORKSPACE_ID,
    account_payload,
    category_payload,
    contact_payload,
    snapclerk_payload,
)

from skyclerk.schemas import (
    Billing,
    Category,
    ChangePasswordRequest,
    Contact,
    Ledger,
    PingResponse,
    SnapClerk,
    StatusLevel,
    UpdateProfileRequest,
    User,
    list_of,
)


class TestLedger:
    def test_decode(self, sample_ledger):
        ledger = Ledger.from_api_response(sample_ledger)

        assert ledger.id == 1001
        assert ledger.amount == -4.5
        assert ledger.contact.name == "Blue Bottle Coffee"
        assert ledger.category.is_expense is True
        assert [label.name for label in ledger.labels] == ["Travel"]
        assert ledger.files == []

    def test_zero_coordinates_are_none(self, sample_ledger):
        ledger = Ledger.from_api_response(sample_ledger)
        assert ledger.lat is None
        assert ledger.lon is None

    def test_coordinates_kept_when_set(self, sample_ledger):
        sample_ledger.update(lat=47.07, lon=15.44)
        ledger = Ledger.from_api_response(sample_ledger)
        assert (ledger.lat, ledger.lon) == (47.07, 15.44)

    def test_integer_amount_accepted(self, sample_ledger):
        sample_ledger["amount"] = 12
        assert Ledger.from_api_response(sample_ledger).amount == 12.0

    def test_to_dict_writes_sentinels_back(self, sample_ledger):
        assert Ledger.from_api_response(sample_ledger).to_dict() == sample_ledger

    def test_missing_key_raises(self, sample_ledger):
        del sample_ledger["note"]
        with pytest.raises(KeyError):
            Ledger.from_api_response(sample_ledger)

    def test_bool_is_not_an_integer(self, sample_ledger):
        sample_ledger["id"] = True
        with pytest.raises(TypeError):
            Ledger.from_api_response(sample_ledger)

    @pytest.mark.parametrize(
        "date,expected",
        [
            ("2024-11-18T09:30:00.123Z", datetime(2024, 11, 18, 9, 30, 0, 123000, tzinfo=timezone.utc)),
            ("2024-11-18T09:30:00Z", datetime(2024, 11, 18, 9, 30, tzinfo=timezone.utc)),
            ("2024-11-18", datetime(2024, 11, 18, tzinfo=timezone.utc)),
            ("18.11.2024", None),
        ],
    )
    def test_parsed_date(self, sample_ledger, date, expected):
        sample_ledger["date"] = date
        assert Ledger.from_api_response(sample_ledger).parsed_date == expected

    def test_list_decoder(self, sample_ledger):
        ledgers = list_of(Ledger)([sample_ledger, sample_ledger])
        assert len(ledgers) == 2


class TestContactAndCategory:
    def test_display_name_prefers_name(self):
        assert Contact.from_api_response(contact_payload()).display_name == "Blue Bottle Coffee"

    def test_display_name_falls_back_to_person(self):
        contact = Contact.from_api_response(
            contact_payload(name="", first_name="Jane", last_name="Doe")
        )
        assert contact.display_name == "Jane Doe"

    @pytest.mark.parametrize(
        "raw,label",
        [("1", "income"), ("income", "income"), ("2", "expense"), ("expense", "expense"),
         ("other", "other")],
    )
    def test_category_type_label(self, raw, label):
        category = Category.from_api_response(category_payload(type=raw))
        assert category.type_label == label
        assert category.to_dict()["type"] == raw


class TestSnapClerk:
    def test_unprocessed_receipt(self):
        snapclerk = SnapClerk.from_api_response(snapclerk_payload())

        assert snapclerk.ledger_id is None
        assert snapclerk.processed_at is None
        assert snapclerk.file.id == 99
        assert snapclerk.status_level == StatusLevel.WARNING
        assert snapclerk.created_date == datetime(2024, 11, 19, 8, 14, 22, tzinfo=timezone.utc)

    def test_processed_receipt(self):
        snapclerk = SnapClerk.from_api_response(
            snapclerk_payload(status="Success", ledger_id=1001, processed_at="2024-11-19T09:00:00Z")
        )

        assert snapclerk.ledger_id == 1001
        assert snapclerk.processed_at == "2024-11-19T09:00:00Z"
        assert snapclerk.status_level == StatusLevel.SUCCESS

    @pytest.mark.parametrize("status", ["Rejected", "error"])
    def test_failed_status(self, status):
        snapclerk = SnapClerk.from_api_response(snapclerk_payload(status=status))
        assert snapclerk.status_level == StatusLevel.DANGER


class TestUser:
    def test_me_payload_is_snake_case(self, sample_me):
        user = User.from_me_response(sample_me)

        assert user.id == USER_ID
        assert user.first_name == "Jane"
        assert [a.id for a in user.accounts] == [WORKSPACE_ID, 43]

    def test_profile_payload_is_pascal_case(self):
        user = User.from_api_response(
            {
                "Id": USER_ID,
                "Email": "jane@example.com",
                "FirstName": "Jane",
                "LastName": "Doe",
                "Accounts": [account_payload()],
            }
        )
        assert user.last_name == "Doe"
        assert user.accounts[0].name == "Jane's Bakery"

    def test_casings_are_not_interchangeable(self, sample_me):
        with pytest.raises(KeyError):
            User.from_api_response(sample_me)

    def test_find_account(self, sample_me):
        user = User.from_me_response(sample_me)
        assert user.find_account(43).name == "Side Project"
        assert user.find_account(1) is None
        assert user.find_account(None) is None


class TestRequestBodies:
    def test_update_profile_keys(self):
        body = UpdateProfileRequest(first_name="Jane", last_name="Doe", email="j@example.com")
        assert body.to_dict() == {"FirstName": "Jane", "LastName": "Doe", "Email": "j@example.com"}

    def test_change_password_keys(self):
        body = ChangePasswordRequest(current_password="a", password="b", confirm_password="b")
        assert body.to_dict() == {"CurrentPassword": "a", "Password": "b", "ConfirmPassword": "b"}


class TestMisc:
    def test_billing_empty_trial_is_none(self):
        billing = Billing.from_api_response(
            {
                "id": 1,
                "subscription": "Monthly",
                "status": "Active",
                "payment_processor": "Stripe",
                "trial_expire": "",
                "card_brand": "Visa",
                "card_last_4": "4242",
                "card_exp_month": 12,
                "card_exp_year": 2030,
                "current_period_start": "2024-11-01",
                "current_period_end": "2024-12-01",
            }
        )
        assert billing.trial_expire is None
        assert billing.to_dict()["trial_expire"] == ""

    def test_ping_status_key(self):
        assert PingResponse.from_api_response({"Status": "Delinquent"}).normalized_status == "delinquent"
        with pytest.raises(KeyError):
            PingResponse.from_api_response({"status": "active"})
