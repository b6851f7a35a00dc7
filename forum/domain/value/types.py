"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject, ValueObject
from forum.domain.value.identifiers import UserId


class VoteDirection(str, Enum):
    """Direction of a vote.

    Absence of a vote record is the "no vote" state, so there is no
    neutral member here.
    """

    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        """Contribution of one vote in this direction to a score."""
        return 1 if self is VoteDirection.UP else -1

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteTransition(str, Enum):
    """Persisted effect of a vote action."""

    INSERT = "insert"  # no prior vote, one is created
    FLIP = "flip"  # prior vote in the opposite direction is updated
    RETRACT = "retract"  # prior vote in the same direction is deleted


class NotificationType(str, Enum):
    """What triggered a notification."""

    COMMENT = "comment"
    VOTE = "vote"
    FOLLOW = "follow"
    MENTION = "mention"
    OTHER = "other"


class CommentOrder(str, Enum):
    """Sibling order of a comment forest."""

    OLDEST_FIRST = "oldest"
    NEWEST_FIRST = "newest"


class PostSortOrder(str, Enum):
    """Sort order for post listings.

    HOT has no time decay: it ranks by score and breaks ties by recency.
    """

    NEW = "new"
    TOP = "top"
    HOT = "hot"


class CommunityVisibility(str, Enum):
    """Who can see and post in a community."""

    PUBLIC = "public"
    RESTRICTED = "restricted"
    PRIVATE = "private"


class Handle(RootValueObject[str]):
    """User display handle (the original's username)."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class CommunityName(RootValueObject[str]):
    """Community name.

    Letters, numbers and underscores only, 3-21 characters.
    Examples: 'python', 'AskScience', 'rust_lang'
    """

    @field_validator("root")
    @classmethod
    def validate_community_name(cls, v: str) -> str:
        """Validate community name format."""
        if not re.match(r"^[A-Za-z0-9_]{3,21}$", v):
            raise ValueError(
                "Community names must be 3-21 characters: letters, numbers "
                "and underscores only"
            )
        return v


class Viewer(ValueObject):
    """The signed-in user as reported by the auth provider."""

    user_id: UserId
    handle: Handle
