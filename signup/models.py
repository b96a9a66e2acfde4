import uuid
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()

PAST_CHOICES = ('yes', 'no')


def new_group_id() -> str:
    return uuid.uuid4().hex


class Group(db.Model):
    __tablename__ = 'groups'

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.String(32), unique=True, nullable=False, index=True, default=new_group_id)
    group_fee_paid = db.Column(db.Boolean, nullable=False, default=False)  # Snapshot taken at creation
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    members = db.relationship(
        'Member',
        back_populates='group',
        order_by='Member.position',
        cascade='all, delete-orphan'
    )

    def member(self, position: int):
        """Return the member at ``position`` or None when the slot is empty."""
        if position < len(self.members):
            return self.members[position]
        return None

    def to_dict(self):
        return {
            'id': self.group_id,
            'members': [m.to_dict() for m in self.members],
            'group_fee_paid': self.group_fee_paid,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Member(db.Model):
    __tablename__ = 'members'

    id = db.Column(db.Integer, primary_key=True)
    group_pk = db.Column(db.Integer, db.ForeignKey('groups.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)  # 0 = first player, 1 = second

    name = db.Column(db.String(200), nullable=False)
    form = db.Column(db.String(100), nullable=False, default='')
    year = db.Column(db.String(50), nullable=False, default='')
    experience = db.Column(db.Text, nullable=False, default='')
    past = db.Column(db.String(3), nullable=False, default='no')
    reason = db.Column(db.Text, nullable=False, default='')
    fee_paid = db.Column(db.Boolean, nullable=False, default=False)
    email = db.Column(db.String(320), nullable=False, default='')

    group = db.relationship('Group', back_populates='members')

    __table_args__ = (
        db.UniqueConstraint('group_pk', 'position', name='unique_member_slot'),
    )

    @validates('name')
    def validate_name(self, key, value):
        if not value:
            raise ValueError('Member name is required')
        return value

    @validates('past')
    def validate_past(self, key, value):
        if value not in PAST_CHOICES:
            raise ValueError(f'past must be one of {PAST_CHOICES}, got {value!r}')
        return value

    def to_dict(self):
        return {
            'name': self.name,
            'form': self.form,
            'year': self.year,
            'experience': self.experience,
            'past': self.past,
            'reason': self.reason,
            'fee_paid': self.fee_paid,
            'email': self.email,
        }
