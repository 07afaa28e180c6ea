"""Public async client entrypoint."""

from __future__ import annotations

from types import TracebackType
from typing import TypeVar

from .client_shared import (
    account_courses_path,
    account_path,
    accounts_path,
    build_request,
    course_accounts_path,
    course_assignments_path,
    course_files_path,
    course_folders_path,
    course_path,
    course_users_path,
    courses_path,
    folder_files_path,
    folder_folders_path,
    search_accounts_path,
    user_files_path,
    user_path,
    validate_client_config,
)
from .config import CanvasClientConfig
from .core.async_pagination import AsyncPaginator
from .core.async_streams import AsyncItemStream
from .core.async_transport import AsyncTransport
from .core.decoding import PageDecoder
from .core.errors import CanvasClientClosedError
from .core.pagination_shared import ErrorPolicy, raise_error
from .core.params import Option, opt, options_to_pairs
from .core.response_parsing import parse_json_object
from .resources.models import Account, Assignment, Course, File, Folder, User
from .resources.parser import (
    decode_accounts,
    decode_assignments,
    decode_courses,
    decode_files,
    decode_folders,
    decode_users,
    parse_account,
    parse_course,
    parse_user,
)

T = TypeVar("T")


class AsyncCanvasClient:
    """Public async Canvas API client."""

    def __init__(
        self,
        *,
        config: CanvasClientConfig | None = None,
        transport: AsyncTransport | None = None,
        error_policy: ErrorPolicy | None = None,
    ) -> None:
        self._config = config or CanvasClientConfig()
        validate_client_config(self._config)
        self._transport = transport or AsyncTransport(self._config)
        self._error_policy = error_policy
        self._closed = False

    @property
    def config(self) -> CanvasClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise CanvasClientClosedError("AsyncCanvasClient is already closed")

    def set_token(self, token: str) -> None:
        self._transport.set_token(token)

    async def paginate(
        self,
        path: str,
        decoder: PageDecoder[T],
        *options: Option,
        policy: ErrorPolicy | None = None,
        per_page: int | None = None,
    ) -> AsyncItemStream[T]:
        self._ensure_open()
        paginator = AsyncPaginator(
            self._transport,
            build_request(self._config, path, options, per_page=per_page),
            decoder,
            max_workers=self._config.pagination.max_workers,
            buffer_size=self._config.pagination.stream_buffer_size,
        )
        return await paginator.stream(policy if policy is not None else self._error_policy)

    async def collect(
        self,
        path: str,
        decoder: PageDecoder[T],
        *options: Option,
        per_page: int | None = None,
    ) -> list[T]:
        stream = await self.paginate(path, decoder, *options, policy=raise_error, per_page=per_page)
        return [item async for item in stream]

    async def courses(
        self,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Course]:
        return await self.paginate(courses_path(), decode_courses, *options, policy=policy)

    async def list_courses(self, *options: Option) -> list[Course]:
        return await self.collect(courses_path(), decode_courses, *options)

    async def course_users(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[User]:
        return await self.paginate(course_users_path(course_id), decode_users, *options, policy=policy)

    async def course_files(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[File]:
        return await self.paginate(course_files_path(course_id), decode_files, *options, policy=policy)

    async def list_course_files(self, course_id: int, *options: Option) -> list[File]:
        return await self.collect(course_files_path(course_id), decode_files, *options)

    async def course_folders(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Folder]:
        return await self.paginate(
            course_folders_path(course_id), decode_folders, *options, policy=policy
        )

    async def folder_files(
        self,
        folder_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[File]:
        return await self.paginate(folder_files_path(folder_id), decode_files, *options, policy=policy)

    async def folder_folders(
        self,
        folder_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Folder]:
        return await self.paginate(
            folder_folders_path(folder_id), decode_folders, *options, policy=policy
        )

    async def user_files(
        self,
        user_id: int | str,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[File]:
        return await self.paginate(user_files_path(user_id), decode_files, *options, policy=policy)

    async def course_assignments(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Assignment]:
        return await self.paginate(
            course_assignments_path(course_id), decode_assignments, *options, policy=policy
        )

    async def list_course_assignments(self, course_id: int, *options: Option) -> list[Assignment]:
        return await self.collect(course_assignments_path(course_id), decode_assignments, *options)

    async def accounts(
        self,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Account]:
        return await self.paginate(accounts_path(), decode_accounts, *options, policy=policy)

    async def list_accounts(self, *options: Option) -> list[Account]:
        return await self.collect(accounts_path(), decode_accounts, *options)

    async def course_accounts(
        self,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Account]:
        return await self.paginate(course_accounts_path(), decode_accounts, *options, policy=policy)

    async def search_accounts(
        self,
        term: str,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Account]:
        return await self.paginate(
            search_accounts_path(), decode_accounts, *options, opt("name", term), policy=policy
        )

    async def account_courses(
        self,
        account_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> AsyncItemStream[Course]:
        return await self.paginate(
            account_courses_path(account_id), decode_courses, *options, policy=policy
        )

    async def get_course(self, course_id: int, *options: Option) -> Course:
        return parse_course(await self._get_object(course_path(course_id), options))

    async def get_user(self, user_id: int | str, *options: Option) -> User:
        return parse_user(await self._get_object(user_path(user_id), options))

    async def current_user(self, *options: Option) -> User:
        return await self.get_user("self", *options)

    async def get_account(self, account_id: int | str, *options: Option) -> Account:
        return parse_account(await self._get_object(account_path(account_id), options))

    async def current_account(self, *options: Option) -> Account:
        return await self.get_account("self", *options)

    async def _get_object(self, path: str, options: tuple[Option, ...]) -> dict[str, object]:
        self._ensure_open()
        response = await self._transport.get(path, params=options_to_pairs(options))
        return parse_json_object(response.content)

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncCanvasClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncCanvasClient",
]
