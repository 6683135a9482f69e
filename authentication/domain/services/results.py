"""
Result objects for service layer.

Using dataclasses to return structured results from service methods
instead of mixed tuples or dicts.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class LoginResult:
    """Result of a signup or login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None  # ErrorCodes value
    message: Optional[str] = None
