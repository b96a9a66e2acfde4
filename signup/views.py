from dataclasses import dataclass
from typing import List

from markupsafe import Markup, escape

from .models import Group
from .roster import yes_no


@dataclass
class RosterRow:
    """One dashboard table row. Every text field is already HTML-escaped."""
    group_id: Markup
    first_name: Markup
    second_name: Markup
    year: Markup
    form: Markup
    experience: Markup
    past: Markup
    email: Markup
    fee_paid: Markup
    group_fee_paid: Markup
    created: Markup


def _pair(group: Group, field: str) -> Markup:
    # Second value is only shown when a second member exists
    first = group.member(0)
    second = group.member(1)
    value = escape(getattr(first, field) if first else '')
    if second and second.name:
        value = value + Markup(' / ') + escape(getattr(second, field))
    return value


def build_roster_rows(groups: List[Group]) -> List[RosterRow]:
    rows = []
    for group in groups:
        first = group.member(0)
        second = group.member(1)

        fee = yes_no(first.fee_paid) if first else 'no'
        if second and second.name:
            fee = f"{fee} / {yes_no(second.fee_paid)}"

        rows.append(RosterRow(
            group_id=escape(group.group_id),
            first_name=escape(first.name if first else ''),
            second_name=escape(second.name if second else ''),
            year=_pair(group, 'year'),
            form=_pair(group, 'form'),
            experience=_pair(group, 'experience'),
            past=_pair(group, 'past'),
            email=_pair(group, 'email'),
            fee_paid=escape(fee),
            group_fee_paid=escape(yes_no(group.group_fee_paid)),
            created=escape(group.created_at.strftime('%Y-%m-%d %H:%M UTC') if group.created_at else '')
        ))
    return rows
