# Security
from hotel_reservation.security.auth import (
    get_password_hash, verify_password, create_access_token, decode_token,
    get_current_account, require_admin, require_table_permission
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token', 'decode_token',
    'get_current_account', 'require_admin', 'require_table_permission'
]
