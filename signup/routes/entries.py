import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from signup.entry_validator import EntryValidationError, payload_from_form, validate_entry
from signup.roster import get_roster

logger = logging.getLogger(__name__)

bp = Blueprint('entries', __name__)


def read_payload():
    """JSON body, or a bracket-keyed form post."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return payload_from_form(request.form)


@bp.route('/')
def index():
    """Public entry form."""
    return render_template('index.html')


@bp.route('/submit', methods=['POST'])
def submit():
    """Validate one group entry and store it."""
    try:
        entry = validate_entry(read_payload(), current_app.config['EMAIL_DOMAIN'])
    except EntryValidationError as e:
        logger.debug(f"Rejected entry: {e.message}")
        return jsonify({'ok': False, 'message': e.message}), 400

    group = get_roster().create_group(entry)
    return jsonify({'ok': True, 'id': group.group_id})
