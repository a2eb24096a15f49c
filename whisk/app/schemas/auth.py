from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CurrentUser(BaseModel):
    """The caller identified by a verified bearer token; ``id`` is the ``sub`` claim."""

    id: str
    email: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "CurrentUser":
        return cls(id=str(claims["sub"]), email=claims.get("email"), claims=claims)
