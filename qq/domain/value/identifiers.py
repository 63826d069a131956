"""Strongly typed identifiers for domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

AuthIdentityId = NewType("AuthIdentityId", UUID)
OtpCodeId = NewType("OtpCodeId", UUID)
UserId = NewType("UserId", UUID)
