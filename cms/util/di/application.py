"""Application layer DI providers."""

from dishka import Scope, provide

from cms.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from cms.application.usecase.category import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    ReassignCategoryUseCase,
    UpdateCategoryUseCase,
)
from cms.application.usecase.post import (
    BulkPostActionUseCase,
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from cms.application.usecase.tag import (
    CreateTagUseCase,
    DeleteTagUseCase,
    GetTagUseCase,
    ListTagsUseCase,
    MergeTagsUseCase,
    PopularTagsUseCase,
    RemoveTagFromPostsUseCase,
    UpdateTagUseCase,
)
from cms.application.usecase.user import UpdateUserRoleUseCase
from cms.domain.service import (
    AuthService,
    CategoryService,
    JWTService,
    PostService,
    TagService,
    UserService,
)
from cms.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, auth_service: AuthService, jwt_service: JWTService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(auth_service=auth_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, auth_service: AuthService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_update_user_role_use_case(
        self, user_service: UserService
    ) -> UpdateUserRoleUseCase:
        """Provide update user role use case."""
        return UpdateUserRoleUseCase(user_service=user_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        user_service: UserService,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            category_service=category_service,
            tag_service=tag_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        user_service: UserService,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            category_service=category_service,
            tag_service=tag_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_post_action_use_case(
        self, post_service: PostService
    ) -> BulkPostActionUseCase:
        """Provide bulk post action use case."""
        return BulkPostActionUseCase(post_service=post_service)

    # Category use cases
    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, category_service: CategoryService, post_service: PostService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(
            category_service=category_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_category_use_case(
        self, category_service: CategoryService, post_service: PostService
    ) -> GetCategoryUseCase:
        """Provide get category use case."""
        return GetCategoryUseCase(
            category_service=category_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_update_category_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategoryUseCase:
        """Provide update category use case."""
        return UpdateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_category_use_case(
        self, category_service: CategoryService
    ) -> DeleteCategoryUseCase:
        """Provide delete category use case."""
        return DeleteCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_reassign_category_use_case(
        self, category_service: CategoryService
    ) -> ReassignCategoryUseCase:
        """Provide reassign category use case."""
        return ReassignCategoryUseCase(category_service=category_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(
        self, tag_service: TagService, post_service: PostService
    ) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service, post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_popular_tags_use_case(self, tag_service: TagService) -> PopularTagsUseCase:
        """Provide popular tags use case."""
        return PopularTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_tag_use_case(
        self, tag_service: TagService, post_service: PostService
    ) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(tag_service=tag_service, post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_create_tag_use_case(self, tag_service: TagService) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_update_tag_use_case(self, tag_service: TagService) -> UpdateTagUseCase:
        """Provide update tag use case."""
        return UpdateTagUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_tag_use_case(self, tag_service: TagService) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_tag_from_posts_use_case(
        self, tag_service: TagService
    ) -> RemoveTagFromPostsUseCase:
        """Provide remove tag from posts use case."""
        return RemoveTagFromPostsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_merge_tags_use_case(self, tag_service: TagService) -> MergeTagsUseCase:
        """Provide merge tags use case."""
        return MergeTagsUseCase(tag_service=tag_service)
