"""
Pytest configuration and fixtures for sign-up service tests.
"""
import os
import sys
from datetime import datetime

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from signup.app import create_app
from signup.models import db, Group, Member

STAFF_PASSWORD = 'letmein'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(autouse=True)
def db_session(app):
    """Give every test empty tables."""
    with app.app_context():
        db.session.remove()

        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()
        db.session.remove()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def staff_client(client):
    """Test client that has already logged in as staff."""
    response = client.post('/teacher/login', data={'password': STAFF_PASSWORD})
    assert response.status_code == 302
    return client


def player(name, **overrides):
    data = {
        'name': name,
        'form': 'Watt',
        'year': 'Year 7',
        'experience': 'Some',
        'past': 'no',
        'reason': 'Fun',
        'fee': 'yes',
        'email': '',
    }
    data.update(overrides)
    return data


@pytest.fixture
def entry_payload():
    """A valid submission body."""
    return {
        'group': 'yes',
        'p1': player('Alice Smith', email='Alice.Smith'),
        'p2': player('Bob Jones', fee='no', form='Tolkien', year='Year 8'),
    }


@pytest.fixture
def make_group(db_session):
    """Insert a group directly, with control over created_at."""
    def _make(first_name, second_name='Partner', created_at=None, group_fee_paid=True, **member_fields):
        group = Group(
            group_fee_paid=group_fee_paid,
            created_at=created_at or datetime.utcnow()
        )
        group.members.append(Member(position=0, name=first_name, fee_paid=True, **member_fields))
        if second_name is not None:
            group.members.append(Member(position=1, name=second_name))
        db_session.add(group)
        db_session.commit()
        return group.group_id
    return _make
