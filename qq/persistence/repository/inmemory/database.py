"""In-memory store shared by in-memory units of work.

Each unit of work copies the committed tables when it begins and works on
that copy. Commit re-checks unique and foreign key constraints against the
current committed state and swaps the copy in, so two transactions racing on
the same email behave like they would against PostgreSQL: the later commit
fails with ``UniqueViolationError``.
"""

from dataclasses import dataclass, field
from typing import Optional

from qq.domain.error import UniqueViolationError, ValidationError
from qq.domain.model import AuthIdentity, OtpCode, User
from qq.domain.value import AuthIdentityId, OtpCodeId, UserId


@dataclass
class InMemoryTables:
    """Rows keyed by primary key. Models are immutable, so copies are shallow."""

    auth_identities: dict[AuthIdentityId, AuthIdentity] = field(default_factory=dict)
    otp_codes: dict[OtpCodeId, OtpCode] = field(default_factory=dict)
    users: dict[UserId, User] = field(default_factory=dict)

    def copy(self) -> "InMemoryTables":
        return InMemoryTables(
            auth_identities=dict(self.auth_identities),
            otp_codes=dict(self.otp_codes),
            users=dict(self.users),
        )

    def check_identity_unique(self, identity: AuthIdentity) -> None:
        if identity.id in self.auth_identities:
            raise UniqueViolationError("auth_identity primary key already exists")
        for existing in self.auth_identities.values():
            if existing.email == identity.email:
                raise UniqueViolationError("auth_identity email already exists")

    def check_otp_code(self, otp_code: OtpCode) -> None:
        if otp_code.id in self.otp_codes:
            raise UniqueViolationError("otp_code primary key already exists")
        if otp_code.auth_id not in self.auth_identities:
            raise ValidationError("otp_code references unknown auth_identity")

    def check_user(self, user: User) -> None:
        if user.id in self.users:
            raise UniqueViolationError("user primary key already exists")
        if user.auth_id not in self.auth_identities:
            raise ValidationError("user references unknown auth_identity")
        for existing in self.users.values():
            if existing.auth_id == user.auth_id:
                raise UniqueViolationError("user auth_id already exists")
            if existing.username == user.username:
                raise UniqueViolationError("user username already exists")


class InMemoryDatabase:
    """Committed state plus optional failure injection for tests."""

    def __init__(self) -> None:
        self.tables = InMemoryTables()
        self.commit_count = 0
        self.fail_on_commit: Optional[Exception] = None

    def snapshot(self) -> InMemoryTables:
        """Copy of the committed tables for a new transaction."""
        return self.tables.copy()

    def apply(
        self,
        inserted_identities: list[AuthIdentity],
        inserted_otp_codes: list[OtpCode],
        inserted_users: list[User],
        deleted_otp_code_ids: set[OtpCodeId],
    ) -> None:
        """Validate a transaction's writes against committed state and publish.

        Raises:
            UniqueViolationError: If a concurrent commit took a unique value
            ValidationError: If a referenced identity no longer exists
        """
        if self.fail_on_commit is not None:
            error, self.fail_on_commit = self.fail_on_commit, None
            raise error

        # Replay inserts on a scratch copy so rows from this transaction are
        # checked against each other too.
        merged = self.tables.copy()
        for identity in inserted_identities:
            merged.check_identity_unique(identity)
            merged.auth_identities[identity.id] = identity
        for user in inserted_users:
            merged.check_user(user)
            merged.users[user.id] = user
        for otp_code in inserted_otp_codes:
            merged.check_otp_code(otp_code)
            merged.otp_codes[otp_code.id] = otp_code
        for otp_code_id in deleted_otp_code_ids:
            merged.otp_codes.pop(otp_code_id, None)

        self.tables = merged
        self.commit_count += 1
