from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .models import PAST_CHOICES

MISSING_PLAYER_ONE = "Missing Player 1 name"
NO_GROUP = "Please come back with a group."
MISSING_PLAYER_TWO = "Group entries must include both members."
EMAIL_HAS_AT = "Do not include @ in email"
FEE_INELIGIBLE = "Please go to Mr Smith (M22) To find out more. You cannot join."
INVALID_PAST = "Played before must be yes or no"


class EntryValidationError(Exception):
    """A submission was rejected; ``message`` is safe to show the entrant."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class MemberEntry:
    name: str
    form: str = ''
    year: str = ''
    experience: str = ''
    past: str = 'no'
    reason: str = ''
    fee_paid: bool = False
    email: str = ''


@dataclass
class GroupEntry:
    members: Tuple[MemberEntry, ...]

    @property
    def group_fee_paid(self) -> bool:
        return any(m.fee_paid for m in self.members)


def _text(player: Dict[str, Any], field: str) -> str:
    value = player.get(field)
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def _player(payload: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    player = payload.get(key)
    return player if isinstance(player, dict) else None


def normalize_email(local_part: str, domain: str) -> Optional[str]:
    """
    Turn a mailbox name into a full institutional address.

    Returns '' for an empty (or blank) input and None when the input
    already contains '@', which callers must reject.
    """
    if not local_part:
        return ''
    if '@' in local_part:
        return None
    local = local_part.strip().lower()
    if not local:
        return ''
    return f"{local}@{domain}"


def _build_member(player: Dict[str, Any], email: str) -> MemberEntry:
    past = _text(player, 'past') or 'no'
    if past not in PAST_CHOICES:
        raise EntryValidationError(INVALID_PAST)

    return MemberEntry(
        name=_text(player, 'name'),
        form=_text(player, 'form'),
        year=_text(player, 'year'),
        experience=_text(player, 'experience'),
        past=past,
        reason=_text(player, 'reason'),
        fee_paid=_text(player, 'fee') == 'yes',
        email=email
    )


def validate_entry(payload: Any, email_domain: str) -> GroupEntry:
    """
    Validate and normalize a raw submission.

    Rules are applied in order and the first failure raises
    EntryValidationError. Nothing here touches the database.
    """
    if not isinstance(payload, dict):
        payload = {}

    p1 = _player(payload, 'p1')
    p2 = _player(payload, 'p2')

    if not p1 or not _text(p1, 'name'):
        raise EntryValidationError(MISSING_PLAYER_ONE)

    if payload.get('group') != 'yes':
        raise EntryValidationError(NO_GROUP)

    if not p2 or not _text(p2, 'name'):
        raise EntryValidationError(MISSING_PLAYER_TWO)

    p1_email = normalize_email(_text(p1, 'email'), email_domain)
    p2_email = normalize_email(_text(p2, 'email'), email_domain)
    if p1_email is None or p2_email is None:
        raise EntryValidationError(EMAIL_HAS_AT)

    if not (_text(p1, 'fee') == 'yes' or _text(p2, 'fee') == 'yes'):
        raise EntryValidationError(FEE_INELIGIBLE)

    return GroupEntry(members=(
        _build_member(p1, p1_email),
        _build_member(p2, p2_email),
    ))


def payload_from_form(form) -> Dict[str, Any]:
    """Fold bracket-keyed form fields (``p1[name]``) into the JSON payload shape."""
    payload: Dict[str, Any] = {'p1': {}, 'p2': {}}
    for key, value in form.items():
        if key.startswith(('p1[', 'p2[')) and key.endswith(']'):
            payload[key[:2]][key[3:-1]] = value
        else:
            payload[key] = value
    return payload
