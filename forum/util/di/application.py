"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentTreeUseCase,
)
from forum.application.usecase.community import (
    CreateCommunityUseCase,
    ListCommunitiesUseCase,
)
from forum.application.usecase.notification import (
    GetNotificationsUseCase,
    MarkAllReadUseCase,
    MarkReadUseCase,
    StreamNotificationsUseCase,
)
from forum.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    SearchPostsUseCase,
)
from forum.application.usecase.user import (
    GetUserProfileUseCase,
    ListUserPostsUseCase,
    UpdateUserProfileUseCase,
)
from forum.application.usecase.vote import ApplyVoteUseCase
from forum.config import CommentSettings
from forum.domain.repository import Transaction
from forum.domain.service import (
    CommentService,
    CommunityService,
    NotificationService,
    PostService,
    PushChannel,
    UserService,
    VoteLedger,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_apply_vote_use_case(self, vote_ledger: VoteLedger) -> ApplyVoteUseCase:
        """Provide apply vote use case."""
        return ApplyVoteUseCase(vote_ledger=vote_ledger)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_ledger: VoteLedger
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_ledger=vote_ledger)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, vote_ledger: VoteLedger
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_ledger=vote_ledger)

    @provide(scope=Scope.REQUEST)
    def get_search_posts_use_case(
        self, post_service: PostService, vote_ledger: VoteLedger
    ) -> SearchPostsUseCase:
        """Provide search posts use case."""
        return SearchPostsUseCase(post_service=post_service, vote_ledger=vote_ledger)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
        push_channel: PushChannel,
        transaction: Transaction,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            notification_service=notification_service,
            push_channel=push_channel,
            transaction=transaction,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_ledger: VoteLedger,
        settings: CommentSettings,
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(
            comment_service=comment_service,
            post_service=post_service,
            vote_ledger=vote_ledger,
            settings=settings,
        )

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_get_notifications_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationsUseCase:
        """Provide get notifications use case."""
        return GetNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkReadUseCase:
        """Provide mark read use case."""
        return MarkReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllReadUseCase:
        """Provide mark all read use case."""
        return MarkAllReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_stream_notifications_use_case(
        self, push_channel: PushChannel
    ) -> StreamNotificationsUseCase:
        """Provide stream notifications use case."""
        return StreamNotificationsUseCase(push_channel=push_channel)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_list_user_posts_use_case(
        self,
        user_service: UserService,
        post_service: PostService,
        vote_ledger: VoteLedger,
    ) -> ListUserPostsUseCase:
        """Provide list user posts use case."""
        return ListUserPostsUseCase(
            user_service=user_service,
            post_service=post_service,
            vote_ledger=vote_ledger,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_list_communities_use_case(
        self, community_service: CommunityService
    ) -> ListCommunitiesUseCase:
        """Provide list communities use case."""
        return ListCommunitiesUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_create_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> CreateCommunityUseCase:
        """Provide create community use case."""
        return CreateCommunityUseCase(
            community_service=community_service, user_service=user_service
        )
