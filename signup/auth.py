import hmac
import logging
import time
from functools import wraps

from flask import current_app, redirect, session, url_for
from flask_login import LoginManager, UserMixin, current_user, login_user, logout_user

logger = logging.getLogger(__name__)

login_manager = LoginManager()
login_manager.login_view = 'staff.login_page'

STAFF_USER_ID = 'staff'
AUTHENTICATED_AT = 'authenticated_at'


class StaffUser(UserMixin):
    """The single shared staff identity. There are no per-person accounts."""

    def get_id(self):
        return STAFF_USER_ID


@login_manager.user_loader
def load_user(user_id):
    if user_id == STAFF_USER_ID:
        return StaffUser()
    return None


def check_password(password: str) -> bool:
    """Compare against the configured secret; an empty secret never matches."""
    secret = current_app.config.get('STAFF_PASSWORD') or ''
    if not secret:
        return False
    return hmac.compare_digest(password.encode(), secret.encode())


def log_in_staff():
    session.permanent = True
    login_user(StaffUser())
    session[AUTHENTICATED_AT] = time.time()


def log_out_staff():
    logout_user()
    session.clear()


def is_staff() -> bool:
    """True when this request carries a live staff login."""
    if not current_user.is_authenticated:
        return False

    lifetime = current_app.config['STAFF_SESSION_LIFETIME'].total_seconds()
    logged_in_at = session.get(AUTHENTICATED_AT)
    if logged_in_at is None or time.time() - logged_in_at > lifetime:
        log_out_staff()
        return False
    return True


def staff_page(view):
    """Guard for HTML pages: anonymous visitors go to the login form."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_staff():
            return redirect(url_for('staff.login_page'))
        return view(*args, **kwargs)
    return wrapper


def staff_action(view):
    """Guard for actions and downloads: anonymous callers get 401."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_staff():
            return 'Unauthorized', 401
        return view(*args, **kwargs)
    return wrapper
