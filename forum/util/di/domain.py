"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import (
    AuthSettings,
    NotificationSettings,
    StoreSettings,
    VotingSettings,
)
from forum.domain.repository import (
    CommentRepository,
    CommunityRepository,
    NotificationRepository,
    PostRepository,
    Transaction,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    CommentTreeBuilder,
    CommunityService,
    JWTService,
    NotificationService,
    PostService,
    PushChannel,
    StoreCalls,
    UserService,
    VoteLedger,
    VoteLocks,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. The vote lock registry and the stateless tree builder are
    shared by the whole process.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_vote_locks(self) -> VoteLocks:
        """Provide the process-wide vote lock registry."""
        return VoteLocks()

    @provide(scope=Scope.APP)
    def get_comment_tree_builder(self) -> CommentTreeBuilder:
        """Provide the comment tree builder."""
        return CommentTreeBuilder()

    @provide
    def get_store_calls(
        self, transaction: Transaction, settings: StoreSettings
    ) -> StoreCalls:
        """Provide guarded store access for the request's services."""
        return StoreCalls(transaction=transaction, settings=settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        store: StoreCalls,
        locks: VoteLocks,
        settings: VotingSettings,
    ) -> VoteLedger:
        """Provide vote ledger domain service."""
        return VoteLedger(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            user_repository=user_repository,
            store=store,
            locks=locks,
            settings=settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        tree_builder: CommentTreeBuilder,
        store: StoreCalls,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            tree_builder=tree_builder,
            store=store,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
        store: StoreCalls,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            community_repository=community_repository,
            store=store,
        )

    @provide
    def get_community_service(
        self, community_repository: CommunityRepository, store: StoreCalls
    ) -> CommunityService:
        """Provide community domain service."""
        return CommunityService(community_repository=community_repository, store=store)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, store: StoreCalls
    ) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository, store=store)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        push_channel: PushChannel,
        store: StoreCalls,
        settings: NotificationSettings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            push_channel=push_channel,
            store=store,
            settings=settings,
        )
