import csv
import io
import logging
from datetime import datetime
from typing import List, Optional

from flask import current_app
from sqlalchemy import or_

from .entry_validator import GroupEntry
from .models import db, Group, Member

logger = logging.getLogger(__name__)

CSV_HEADER = [
    'First Name', 'First Year', 'First Form', 'First Email', 'First FeePaid', 'First PlayedBefore',
    'Second Name', 'Second Year', 'Second Form', 'Second Email', 'Second FeePaid', 'Second PlayedBefore',
    'GroupFeePaid', 'CreatedAt'
]

LIKE_ESCAPE = '\\'


class StoreUnavailable(RuntimeError):
    """Raised when no database is configured."""


def escape_like(term: str) -> str:
    """Escape LIKE metacharacters so ``term`` matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )


def format_timestamp(value: Optional[datetime]) -> str:
    """Sortable UTC timestamp, e.g. 2025-01-31T09:05:00.123Z"""
    if not value:
        return ''
    return value.isoformat(timespec='milliseconds') + 'Z'


def yes_no(flag: bool) -> str:
    return 'yes' if flag else 'no'


class RosterService:
    """
    Stores and reads sign-up groups:
    - Create a group from a validated entry
    - Search/list newest-first
    - Delete (idempotent)
    - Full CSV export
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def _require_store(self):
        if not self.enabled:
            raise StoreUnavailable("DATABASE_URL is not configured")

    def create_group(self, entry: GroupEntry) -> Group:
        """Persist one group and its members in a single commit."""
        self._require_store()

        group = Group(group_fee_paid=entry.group_fee_paid)
        for position, m in enumerate(entry.members):
            group.members.append(Member(
                position=position,
                name=m.name,
                form=m.form,
                year=m.year,
                experience=m.experience,
                past=m.past,
                reason=m.reason,
                fee_paid=m.fee_paid,
                email=m.email
            ))

        db.session.add(group)
        db.session.commit()

        logger.info(f"Created group {group.group_id}")
        return group

    def get_group(self, group_id: str) -> Optional[Group]:
        self._require_store()
        return Group.query.filter_by(group_id=group_id).first()

    def search_groups(self, query: str = '') -> List[Group]:
        """
        List groups newest-first, optionally filtered.

        A non-blank query matches case-insensitively as a substring of any
        member's name, form, year or email.
        """
        self._require_store()

        q = Group.query
        term = (query or '').strip()
        if term:
            pattern = f"%{escape_like(term)}%"
            q = q.filter(Group.members.any(or_(
                Member.name.ilike(pattern, escape=LIKE_ESCAPE),
                Member.form.ilike(pattern, escape=LIKE_ESCAPE),
                Member.year.ilike(pattern, escape=LIKE_ESCAPE),
                Member.email.ilike(pattern, escape=LIKE_ESCAPE),
            )))

        return q.order_by(Group.created_at.desc(), Group.id.desc()).all()

    def count_groups(self) -> int:
        self._require_store()
        return Group.query.count()

    def delete_group(self, group_id: str) -> bool:
        """Hard-delete a group. Returns False when it did not exist."""
        self._require_store()

        group = Group.query.filter_by(group_id=group_id).first()
        if not group:
            logger.debug(f"Delete of unknown group {group_id} ignored")
            return False

        db.session.delete(group)
        db.session.commit()

        logger.info(f"Deleted group {group_id}")
        return True

    def export_csv(self) -> str:
        """Every stored group as CSV, all data fields quoted."""
        buf = io.StringIO()
        buf.write(','.join(CSV_HEADER) + '\n')
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n')

        for group in self.search_groups():
            row = []
            for position in (0, 1):
                m = group.member(position)
                if m is None:
                    row.extend([''] * 6)
                    continue
                row.extend([m.name, m.year, m.form, m.email, yes_no(m.fee_paid), m.past])
            row.append(yes_no(group.group_fee_paid))
            row.append(format_timestamp(group.created_at))
            writer.writerow(row)

        return buf.getvalue()


def get_roster() -> RosterService:
    return current_app.roster
