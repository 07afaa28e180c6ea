"""Public client entrypoint."""

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
from .core.decoding import PageDecoder
from .core.errors import CanvasClientClosedError
from .core.pagination import Paginator
from .core.pagination_shared import ErrorPolicy, raise_error
from .core.params import Option, opt, options_to_pairs
from .core.response_parsing import parse_json_object
from .core.streams import ItemStream
from .core.transport import SyncTransport
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


class CanvasClient:
    """Public Canvas API client.

    Collection methods return an :class:`ItemStream` fed by concurrent page
    fetches; items arrive in server order within a page and in no
    particular order across pages. ``list_*`` methods collect a stream and
    raise the first error.
    """

    def __init__(
        self,
        *,
        config: CanvasClientConfig | None = None,
        transport: SyncTransport | None = None,
        error_policy: ErrorPolicy | None = None,
    ) -> None:
        self._config = config or CanvasClientConfig()
        validate_client_config(self._config)
        self._transport = transport or SyncTransport(self._config)
        self._error_policy = error_policy
        self._closed = False

    @property
    def config(self) -> CanvasClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise CanvasClientClosedError("CanvasClient is already closed")

    def set_token(self, token: str) -> None:
        """Rotate the API token; requests already sent keep the old one."""
        self._transport.set_token(token)

    def paginate(
        self,
        path: str,
        decoder: PageDecoder[T],
        *options: Option,
        policy: ErrorPolicy | None = None,
        per_page: int | None = None,
    ) -> ItemStream[T]:
        self._ensure_open()
        paginator = Paginator(
            self._transport,
            build_request(self._config, path, options, per_page=per_page),
            decoder,
            max_workers=self._config.pagination.max_workers,
            buffer_size=self._config.pagination.stream_buffer_size,
        )
        return paginator.stream(policy if policy is not None else self._error_policy)

    def collect(
        self,
        path: str,
        decoder: PageDecoder[T],
        *options: Option,
        per_page: int | None = None,
    ) -> list[T]:
        return list(self.paginate(path, decoder, *options, policy=raise_error, per_page=per_page))

    def courses(self, *options: Option, policy: ErrorPolicy | None = None) -> ItemStream[Course]:
        return self.paginate(courses_path(), decode_courses, *options, policy=policy)

    def list_courses(self, *options: Option) -> list[Course]:
        return self.collect(courses_path(), decode_courses, *options)

    def course_users(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[User]:
        return self.paginate(course_users_path(course_id), decode_users, *options, policy=policy)

    def course_files(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[File]:
        return self.paginate(course_files_path(course_id), decode_files, *options, policy=policy)

    def list_course_files(self, course_id: int, *options: Option) -> list[File]:
        return self.collect(course_files_path(course_id), decode_files, *options)

    def course_folders(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[Folder]:
        return self.paginate(course_folders_path(course_id), decode_folders, *options, policy=policy)

    def folder_files(
        self,
        folder_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[File]:
        return self.paginate(folder_files_path(folder_id), decode_files, *options, policy=policy)

    def folder_folders(
        self,
        folder_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[Folder]:
        return self.paginate(folder_folders_path(folder_id), decode_folders, *options, policy=policy)

    def user_files(
        self,
        user_id: int | str,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[File]:
        return self.paginate(user_files_path(user_id), decode_files, *options, policy=policy)

    def course_assignments(
        self,
        course_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[Assignment]:
        return self.paginate(course_assignments_path(course_id), decode_assignments, *options, policy=policy)

    def list_course_assignments(self, course_id: int, *options: Option) -> list[Assignment]:
        return self.collect(course_assignments_path(course_id), decode_assignments, *options)

    def accounts(self, *options: Option, policy: ErrorPolicy | None = None) -> ItemStream[Account]:
        """Accounts the caller can view or manage."""
        return self.paginate(accounts_path(), decode_accounts, *options, policy=policy)

    def list_accounts(self, *options: Option) -> list[Account]:
        return self.collect(accounts_path(), decode_accounts, *options)

    def course_accounts(self, *options: Option, policy: ErrorPolicy | None = None) -> ItemStream[Account]:
        """Accounts the caller has courses in."""
        return self.paginate(course_accounts_path(), decode_accounts, *options, policy=policy)

    def search_accounts(
        self,
        term: str,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[Account]:
        return self.paginate(
            search_accounts_path(), decode_accounts, *options, opt("name", term), policy=policy
        )

    def account_courses(
        self,
        account_id: int,
        *options: Option,
        policy: ErrorPolicy | None = None,
    ) -> ItemStream[Course]:
        return self.paginate(account_courses_path(account_id), decode_courses, *options, policy=policy)

    def get_course(self, course_id: int, *options: Option) -> Course:
        return parse_course(self._get_object(course_path(course_id), options))

    def get_user(self, user_id: int | str, *options: Option) -> User:
        return parse_user(self._get_object(user_path(user_id), options))

    def current_user(self, *options: Option) -> User:
        return self.get_user("self", *options)

    def get_account(self, account_id: int | str, *options: Option) -> Account:
        return parse_account(self._get_object(account_path(account_id), options))

    def current_account(self, *options: Option) -> Account:
        return self.get_account("self", *options)

    def _get_object(self, path: str, options: tuple[Option, ...]) -> dict[str, object]:
        self._ensure_open()
        response = self._transport.get(path, params=options_to_pairs(options))
        return parse_json_object(response.content)

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "CanvasClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "CanvasClient",
]
