"""
Unit tests for submission validation.
Tests: rule order, email normalization, fee gate, member defaults, form payloads
"""
import pytest
from werkzeug.datastructures import MultiDict

from signup.entry_validator import (
    EntryValidationError,
    GroupEntry,
    MemberEntry,
    normalize_email,
    payload_from_form,
    validate_entry,
    MISSING_PLAYER_ONE,
    NO_GROUP,
    MISSING_PLAYER_TWO,
    EMAIL_HAS_AT,
    FEE_INELIGIBLE,
    INVALID_PAST,
)

DOMAIN = 'arkvictoria.org'


def payload(group='yes', p1=None, p2=None):
    return {
        'group': group,
        'p1': p1 if p1 is not None else {'name': 'Alice', 'fee': 'yes'},
        'p2': p2 if p2 is not None else {'name': 'Bob', 'fee': 'no'},
    }


def rejected(data):
    with pytest.raises(EntryValidationError) as exc:
        validate_entry(data, DOMAIN)
    return exc.value.message


class TestNormalizeEmail:
    """Tests for normalize_email."""

    def test_local_part_gets_domain(self):
        assert normalize_email('John.Smith', DOMAIN) == 'john.smith@arkvictoria.org'

    def test_trims_whitespace(self):
        assert normalize_email('  Jane  ', DOMAIN) == 'jane@arkvictoria.org'

    def test_empty_stays_empty(self):
        assert normalize_email('', DOMAIN) == ''

    def test_blank_becomes_empty(self):
        assert normalize_email('   ', DOMAIN) == ''

    def test_at_sign_is_refused(self):
        assert normalize_email('john@example.com', DOMAIN) is None


class TestRuleOrder:
    """First failing rule decides the message."""

    def test_missing_player_one_name(self):
        assert rejected(payload(p1={'fee': 'yes'})) == MISSING_PLAYER_ONE

    def test_missing_player_one_entirely(self):
        assert rejected({'group': 'yes', 'p2': {'name': 'Bob'}}) == MISSING_PLAYER_ONE

    def test_player_one_not_an_object(self):
        assert rejected(payload(p1='Alice')) == MISSING_PLAYER_ONE

    def test_non_dict_payload(self):
        assert rejected(None) == MISSING_PLAYER_ONE

    def test_player_one_checked_before_group(self):
        assert rejected(payload(group='no', p1={'name': ''})) == MISSING_PLAYER_ONE

    @pytest.mark.parametrize('group', ['no', '', None, 'YES', True])
    def test_solo_entries_rejected(self, group):
        assert rejected(payload(group=group)) == NO_GROUP

    def test_missing_player_two_name(self):
        assert rejected(payload(p2={'name': '', 'fee': 'yes'})) == MISSING_PLAYER_TWO

    def test_email_with_at_rejected(self):
        data = payload(p2={'name': 'Bob', 'fee': 'yes', 'email': 'bob@x.com'})
        assert rejected(data) == EMAIL_HAS_AT

    def test_email_checked_before_fee(self):
        data = payload(
            p1={'name': 'Alice', 'fee': 'no', 'email': 'a@b'},
            p2={'name': 'Bob', 'fee': 'no'}
        )
        assert rejected(data) == EMAIL_HAS_AT

    def test_nobody_can_pay(self):
        data = payload(p1={'name': 'Alice', 'fee': 'no'}, p2={'name': 'Bob', 'fee': 'no'})
        assert rejected(data) == FEE_INELIGIBLE

    def test_fee_must_be_exact_yes(self):
        data = payload(p1={'name': 'Alice', 'fee': 'Yes'}, p2={'name': 'Bob', 'fee': 'true'})
        assert rejected(data) == FEE_INELIGIBLE

    def test_invalid_past_rejected_after_fee_gate(self):
        data = payload(p1={'name': 'Alice', 'fee': 'yes', 'past': 'maybe'})
        assert rejected(data) == INVALID_PAST


class TestValidEntry:
    """Tests for the normalized GroupEntry."""

    def test_builds_two_members(self):
        entry = validate_entry(payload(), DOMAIN)

        assert isinstance(entry, GroupEntry)
        assert [m.name for m in entry.members] == ['Alice', 'Bob']

    def test_defaults(self):
        entry = validate_entry(payload(), DOMAIN)
        bob = entry.members[1]

        assert bob == MemberEntry(name='Bob')
        assert bob.past == 'no'
        assert bob.email == ''

    def test_fee_flags_and_group_fee(self):
        entry = validate_entry(payload(), DOMAIN)

        assert entry.members[0].fee_paid is True
        assert entry.members[1].fee_paid is False
        assert entry.group_fee_paid is True

    def test_second_member_paying_is_enough(self):
        data = payload(p1={'name': 'Alice', 'fee': 'no'}, p2={'name': 'Bob', 'fee': 'yes'})
        entry = validate_entry(data, DOMAIN)
        assert entry.group_fee_paid is True

    def test_emails_normalized(self):
        data = payload(p1={'name': 'Alice', 'fee': 'yes', 'email': ' Alice.S '})
        entry = validate_entry(data, DOMAIN)

        assert entry.members[0].email == 'alice.s@arkvictoria.org'
        assert entry.members[1].email == ''

    def test_custom_domain(self):
        data = payload(p1={'name': 'Alice', 'fee': 'yes', 'email': 'alice'})
        entry = validate_entry(data, 'school.test')
        assert entry.members[0].email == 'alice@school.test'

    def test_non_string_values_coerced(self):
        data = payload(p1={'name': 'Alice', 'fee': 'yes', 'year': 7})
        entry = validate_entry(data, DOMAIN)
        assert entry.members[0].year == '7'

    def test_past_yes_kept(self):
        data = payload(p1={'name': 'Alice', 'fee': 'yes', 'past': 'yes'})
        entry = validate_entry(data, DOMAIN)
        assert entry.members[0].past == 'yes'


class TestPayloadFromForm:
    """Tests for bracket-keyed form folding."""

    def test_folds_player_fields(self):
        form = MultiDict([
            ('group', 'yes'),
            ('p1[name]', 'Alice'),
            ('p1[fee]', 'yes'),
            ('p2[name]', 'Bob'),
        ])

        data = payload_from_form(form)

        assert data == {
            'group': 'yes',
            'p1': {'name': 'Alice', 'fee': 'yes'},
            'p2': {'name': 'Bob'},
        }

    def test_empty_form(self):
        assert payload_from_form(MultiDict()) == {'p1': {}, 'p2': {}}
