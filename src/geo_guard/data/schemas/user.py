"""User schema - canonical definition."""

import hashlib
import hmac

from pydantic import BaseModel, Field


def digest_credential(secret: str) -> str:
    """Hash a credential for storage and equality checks."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


class User(BaseModel):
    """User account.

    The credential is opaque: it is only ever compared for equality, and
    only its digest is kept. Session history lives in the SessionLedger.
    """
    user_id: str = Field(..., min_length=1, description="Stable user identifier")
    username: str = Field(..., min_length=1, description="Login name")
    credential_digest: str = Field(..., repr=False, description="SHA-256 digest of the credential")

    model_config = {"frozen": True}

    @classmethod
    def create(cls, user_id: str, username: str, secret: str) -> "User":
        return cls(
            user_id=user_id,
            username=username,
            credential_digest=digest_credential(secret),
        )

    def credential_valid(self, candidate_secret: str) -> bool:
        """Constant-time comparison of a presented secret against the stored digest."""
        return hmac.compare_digest(
            self.credential_digest, digest_credential(candidate_secret)
        )
