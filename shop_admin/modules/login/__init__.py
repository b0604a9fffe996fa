"""
Login module package exports.

- LoginController: sign-in, registration and password reset flows.
- LoginDialog: the dialog the controller drives.
"""

from .controller import LoginController
from .view import LoginDialog

__all__ = [
    "LoginController",
    "LoginDialog",
]
