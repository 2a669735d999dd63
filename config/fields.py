"""
Field definitions for ERP user records with ordered display and default values.
User fixture files are validated against this table before records reach a test.
"""

from collections import OrderedDict

USER_ROLES = ('administrator', 'user', 'viewer', 'manager')

# User field definitions with display order and defaults
USER_FIELDS = OrderedDict([
    # Identity
    ('id', {'default': None, 'display_name': 'ID', 'required': True}),
    ('username', {'default': '', 'display_name': 'Username', 'required': True}),
    ('password', {'default': '', 'display_name': 'Password', 'required': True}),
    ('email', {'default': '', 'display_name': 'Email', 'required': True}),

    # Authorization
    ('role', {'default': 'user', 'display_name': 'Role', 'required': True}),
    ('company', {'default': '', 'display_name': 'Company', 'required': True}),
    ('active', {'default': False, 'display_name': 'Active', 'required': True}),
    ('permissions', {'default': [], 'display_name': 'Permissions', 'required': True}),

    # Optional profile block (firstName, lastName, department, phone)
    ('profile', {'default': None, 'display_name': 'Profile', 'required': False}),
])

REQUIRED_USER_FIELDS = [name for name, field in USER_FIELDS.items() if field['required']]


def get_user_fields():
    """Get ordered list of user field names."""
    return list(USER_FIELDS.keys())


def get_user_field_default(field_name):
    """Get default value for a user field."""
    default = USER_FIELDS.get(field_name, {}).get('default')
    # Never hand out the shared list instance
    if isinstance(default, list):
        return list(default)
    return default


def get_user_display_name(field_name):
    """Get display name for a user field."""
    return USER_FIELDS.get(field_name, {}).get('display_name', field_name.replace('_', ' ').title())


def is_valid_role(role):
    """Check whether a role name is one the ERP knows about."""
    return role in USER_ROLES


def normalize_user_record(record):
    """
    Normalize a user record to include all expected fields with defaults.

    Args:
        record: User record dictionary

    Returns:
        New record with all fields present; unknown keys are preserved
    """
    normalized = {}
    for field_name in get_user_fields():
        if field_name in record:
            normalized[field_name] = record[field_name]
        else:
            normalized[field_name] = get_user_field_default(field_name)
    for key, value in record.items():
        if key not in normalized:
            normalized[key] = value
    return normalized
