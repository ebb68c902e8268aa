"""
Membership rules: which OUs a user belongs to given their divisions.

All functions in this module are pure and return new EditableUser instances.
"""

from domain.membership.model import (
    check_membership,
    derive_ous,
    has_selected_division,
    membership_violations,
    reconcile_ous,
)
from domain.membership.synchronizer import toggle_division

__all__ = [
    "toggle_division",
    "derive_ous",
    "has_selected_division",
    "membership_violations",
    "check_membership",
    "reconcile_ous",
]
