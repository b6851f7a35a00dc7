"""User profile aggregate.

Accounts live in the external auth provider; this is the forum-side
profile keyed by the same user ID.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Handle, UserId


class User(DomainModel):
    """User profile with karma accumulated from votes on their content."""

    id: UserId
    handle: Handle
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar_url: Optional[str] = None
    karma: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
