"""
Client for AWS Lambda.

``ListFunctions`` returns at most 50 functions per call regardless of the
requested size, so the whole inventory is collected by following ``NextMarker``
until the service stops returning one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from aws_logs_tui.errors import RetrievalError
from aws_logs_tui.models import FunctionCatalog, LambdaFunction

# Maximum results for `ListFunctions` is 50, regardless of a larger requested size.
PAGINATION_SIZE = 50


@dataclass(frozen=True)
class Page:
    entries: Tuple[LambdaFunction, ...]
    next_token: Optional[str] = None


ListPage = Callable[[int, Optional[str]], Page]


def fetch_all_functions(list_page: ListPage) -> FunctionCatalog:
    """
    Request pages until no continuation token is returned and return every
    function as a sorted catalog.

    Any failing page aborts the whole listing; no partial catalog is returned.
    There is no iteration cap; the service ends the marker chain.
    """
    results: List[LambdaFunction] = []
    token: Optional[str] = None
    while True:
        page = list_page(PAGINATION_SIZE, token)
        # An empty page is valid and does not end the listing on its own.
        results.extend(page.entries)
        if page.next_token is None:
            break
        token = page.next_token
    return FunctionCatalog.from_unsorted(results)


class LambdaClient:
    """Adapter from a botocore ``lambda`` client to the page-listing interface."""

    def __init__(self, client: Any) -> None:
        self._client = client
        self._pages_requested = 0

    def list_page(self, page_size: int, token: Optional[str]) -> Page:
        params: dict = {"MaxItems": page_size}
        if token is not None:
            params["Marker"] = token
        self._pages_requested += 1
        try:
            resp = self._client.list_functions(**params)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "ClientError")
            raise RetrievalError(
                f"Failed to list lambda functions ({code}, page {self._pages_requested}): {e}",
                page_number=self._pages_requested,
            ) from e
        except BotoCoreError as e:
            raise RetrievalError(
                f"Failed to list lambda functions (page {self._pages_requested}): {e}",
                page_number=self._pages_requested,
            ) from e

        entries = tuple(
            LambdaFunction(fn["FunctionName"]) for fn in resp.get("Functions", []) if fn.get("FunctionName")
        )
        # botocore may surface an exhausted marker as "" rather than omitting it.
        next_token = resp.get("NextMarker") or None
        return Page(entries=entries, next_token=next_token)

    def get_all_functions(self) -> FunctionCatalog:
        self._pages_requested = 0
        return fetch_all_functions(self.list_page)
