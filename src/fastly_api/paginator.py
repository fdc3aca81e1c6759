"""Page-by-page walking of paginated JSON:API list endpoints.

A paginator wraps one list endpoint and requests one page per
:meth:`Paginator.get_next` call, tracking the page cursor from the
``links`` block of each response.

Example:
    ```python
    paginator = client.new_list_service_authorizations_paginator(per_page=50)

    while paginator.has_next():
        for authorization in paginator.get_next():
            print(authorization.id, authorization.permission)
    ```
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic

from fastly_api.jsonapi import (
    JSONAPI_MEDIA_TYPE,
    ModelT,
    page_number_from_link,
    parse_links,
    unmarshal_many_payload,
)
from fastly_api.settings import MAX_PAGE_SIZE

if TYPE_CHECKING:
    from fastly_api.client import FastlyAPIClient

logger = logging.getLogger(__name__)


class PaginatorState(str, Enum):
    """Lifecycle of a paginator."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    EXHAUSTED = "exhausted"


@dataclass
class PageOptions:
    """Page request options.

    Attributes:
        per_page: Page size; zero or negative uses the default size
        page: Page to start from, 1-indexed; zero or negative starts at 1
    """

    per_page: int = 0
    page: int = 0


class Paginator(Generic[ModelT]):
    """Sequential reader of a paginated list endpoint.

    Not safe for concurrent use; create one paginator per listing.

    Attributes:
        current_page: Last page fetched, 0 before the first fetch
        next_page: Page number advertised by the last ``next`` link
        last_page: Page number advertised by the last ``last`` link,
            0 while the page count is unknown
    """

    def __init__(
        self,
        client: "FastlyAPIClient",
        path: str,
        model: type[ModelT],
        options: PageOptions | None = None,
        default_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        """Initialize the paginator.

        Args:
            client: Client used to issue the page requests.
            path: Path of the list endpoint.
            model: Model each listed resource decodes into.
            options: Page size and starting page.
            default_page_size: Page size used when options give none.
        """
        self._client = client
        self._path = path
        self._model = model
        self.options = options or PageOptions()
        self._default_page_size = default_page_size
        self._started = False

        self.current_page = 0
        self.next_page = 0
        self.last_page = 0

    @property
    def state(self) -> PaginatorState:
        """Current lifecycle state."""
        if not self._started:
            return PaginatorState.NOT_STARTED
        if self.remaining() == 0:
            return PaginatorState.EXHAUSTED
        return PaginatorState.IN_PROGRESS

    def has_next(self) -> bool:
        """Whether another page should be requested.

        Always true before the first fetch, even for an empty collection.
        """
        return not self._started or self.remaining() != 0

    def remaining(self) -> int:
        """Number of pages left after the current one, 0 when unknown."""
        if self.last_page == 0:
            return 0
        return self.last_page - self.current_page

    def _page_size(self) -> int:
        if self.options.per_page > 0:
            return min(self.options.per_page, MAX_PAGE_SIZE)
        return self._default_page_size

    def _page_to_request(self) -> int:
        if self.state is PaginatorState.NOT_STARTED:
            return self.options.page if self.options.page > 0 else 1
        return self.current_page + 1

    def _link_page(self, name: str, link: str | None, previous: int) -> int:
        if not link:
            return previous
        number = page_number_from_link(link)
        if number is None:
            logger.warning(
                "Ignoring %s link without a numeric page number: %s", name, link
            )
            return previous
        return number

    def get_next(self) -> list[ModelT]:
        """Fetch the next page.

        Returns:
            Resources listed on the fetched page.

        Raises:
            FastlyAPIError: If the request fails.
            FastlyDecodeError: If the page is not a JSON:API resource array.
        """
        page = self._page_to_request()
        per_page = self._page_size()

        response = self._client.get(
            self._path,
            params={"page[size]": str(per_page), "page[number]": str(page)},
            headers={"Accept": JSONAPI_MEDIA_TYPE},
        )

        # Both decodes read the same buffered body
        body = response.content
        links = parse_links(body)
        items = unmarshal_many_payload(body, self._model)

        self.current_page = page
        self.next_page = self._link_page("next", links.next, self.next_page)
        self.last_page = self._link_page("last", links.last, self.last_page)
        self._started = True

        logger.debug(
            "Fetched page %d of %s (%d items, last page %d)",
            page,
            self._path,
            len(items),
            self.last_page,
        )
        return items

    def __iter__(self) -> Iterator[ModelT]:
        """Yield every resource of every remaining page.

        Stops early on an empty page so a starting page beyond the last one
        cannot loop forever.
        """
        while self.has_next():
            items = self.get_next()
            if not items:
                return
            yield from items
