import logging

from flask import Blueprint, Response, redirect, render_template, request, url_for

from signup.auth import check_password, is_staff, log_in_staff, log_out_staff, staff_action, staff_page
from signup.roster import get_roster
from signup.views import build_roster_rows

logger = logging.getLogger(__name__)

bp = Blueprint('staff', __name__, url_prefix='/teacher')


# ==================== Session ====================

@bp.route('')
def login_page():
    """Staff login form."""
    if is_staff():
        return redirect(url_for('staff.dashboard'))
    return render_template('staff_login.html', error='')


@bp.route('/login', methods=['POST'])
def login():
    password = str(request.form.get('password', ''))
    if check_password(password):
        log_in_staff()
        logger.info("Staff login succeeded")
        return redirect(url_for('staff.dashboard'))

    logger.warning(f"Staff login failed from {request.remote_addr}")
    return render_template('staff_login.html', error='Incorrect password')


@bp.route('/logout')
def logout():
    log_out_staff()
    return redirect(url_for('staff.login_page'))


# ==================== Roster ====================

@bp.route('/dashboard')
@staff_page
def dashboard():
    """Search and list groups, newest first."""
    q = request.args.get('q', '').strip()
    groups = get_roster().search_groups(q)
    return render_template('dashboard.html',
                           rows=build_roster_rows(groups),
                           count=len(groups),
                           q=q)


@bp.route('/delete/<group_id>', methods=['POST'])
@staff_action
def delete_group(group_id: str):
    get_roster().delete_group(group_id)
    return redirect(url_for('staff.dashboard'))


@bp.route('/export.csv')
@staff_action
def export_csv():
    """Download every group as CSV (ignores any search filter)."""
    return Response(
        get_roster().export_csv(),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=entries.csv'}
    )
