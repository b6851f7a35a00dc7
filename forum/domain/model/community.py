"""Community entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommunityId, CommunityName, CommunityVisibility, UserId


class Community(DomainModel):
    """A named community that posts are submitted to."""

    id: CommunityId
    name: CommunityName
    description: str = Field(default="", max_length=500)
    visibility: CommunityVisibility = CommunityVisibility.PUBLIC
    created_by: UserId
    created_at: datetime = Field(default_factory=datetime.now)
