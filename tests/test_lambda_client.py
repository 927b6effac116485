import unittest
from random import Random
from typing import List, Optional, Tuple

from botocore.exceptions import ClientError, EndpointConnectionError

from aws_logs_tui.errors import RetrievalError
from aws_logs_tui.lambda_client import PAGINATION_SIZE, LambdaClient, Page, fetch_all_functions
from aws_logs_tui.models import LambdaFunction


def _fns(*names: str) -> Tuple[LambdaFunction, ...]:
    return tuple(LambdaFunction(n) for n in names)


class _FakeListing:
    def __init__(self, pages: List[Page]) -> None:
        self.pages = list(pages)
        self.calls: List[Tuple[int, Optional[str]]] = []

    def __call__(self, page_size: int, token: Optional[str]) -> Page:
        self.calls.append((page_size, token))
        return self.pages.pop(0)


class _FakeBotoClient:
    def __init__(self, responses) -> None:
        self.responses = list(responses)
        self.calls: List[dict] = []

    def list_functions(self, **kwargs):
        self.calls.append(kwargs)
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


class TestFetchAllFunctions(unittest.TestCase):
    def test_follows_tokens_and_sorts(self) -> None:
        listing = _FakeListing([Page(_fns("b", "a"), "T1"), Page(_fns("c"), None)])
        catalog = fetch_all_functions(listing)
        self.assertEqual(catalog.names(), ("a", "b", "c"))
        self.assertEqual(listing.calls, [(PAGINATION_SIZE, None), (PAGINATION_SIZE, "T1")])

    def test_page_size_is_fifty(self) -> None:
        self.assertEqual(PAGINATION_SIZE, 50)

    def test_empty_page_with_token_does_not_stop(self) -> None:
        listing = _FakeListing([Page((), "T1"), Page((), "T2"), Page(_fns("x"), None)])
        catalog = fetch_all_functions(listing)
        self.assertEqual(catalog.names(), ("x",))
        self.assertEqual(len(listing.calls), 3)

    def test_result_length_is_sum_of_pages(self) -> None:
        rng = Random(0)
        for _ in range(50):
            n_pages = rng.randint(1, 8)
            pages: List[Page] = []
            total = 0
            for p in range(n_pages):
                count = rng.randint(0, PAGINATION_SIZE)
                total += count
                token = None if p == n_pages - 1 else f"T{p}"
                pages.append(Page(_fns(*[f"fn-{p}-{i}" for i in range(count)]), token))
            catalog = fetch_all_functions(_FakeListing(pages))
            self.assertEqual(len(catalog), total)

    def test_ordinal_sort_is_deterministic(self) -> None:
        pages = [Page(_fns("zebra", "apple", "Apple"), None)]
        first = fetch_all_functions(_FakeListing(list(pages)))
        second = fetch_all_functions(_FakeListing(list(pages)))
        self.assertEqual(first.names(), ("Apple", "apple", "zebra"))
        self.assertEqual(first, second)

    def test_duplicates_are_kept(self) -> None:
        catalog = fetch_all_functions(_FakeListing([Page(_fns("a"), "T"), Page(_fns("a"), None)]))
        self.assertEqual(catalog.names(), ("a", "a"))

    def test_failure_propagates_without_partial_result(self) -> None:
        calls = {"n": 0}

        def listing(page_size: int, token: Optional[str]) -> Page:
            calls["n"] += 1
            if calls["n"] == 2:
                raise RetrievalError("boom", page_number=2)
            return Page(_fns("a"), "T1")

        with self.assertRaises(RetrievalError) as ctx:
            fetch_all_functions(listing)
        self.assertEqual(ctx.exception.page_number, 2)
        self.assertEqual(calls["n"], 2)


class TestLambdaClient(unittest.TestCase):
    def test_list_page_passes_marker_and_reads_next_marker(self) -> None:
        boto = _FakeBotoClient(
            [
                {"Functions": [{"FunctionName": "b"}, {"Runtime": "python3.12"}], "NextMarker": "M1"},
                {"Functions": [{"FunctionName": "a"}]},
            ]
        )
        client = LambdaClient(boto)
        catalog = client.get_all_functions()
        self.assertEqual(catalog.names(), ("a", "b"))
        self.assertEqual(boto.calls, [{"MaxItems": 50}, {"MaxItems": 50, "Marker": "M1"}])

    def test_empty_next_marker_ends_listing(self) -> None:
        boto = _FakeBotoClient([{"Functions": [{"FunctionName": "a"}], "NextMarker": ""}])
        page = LambdaClient(boto).list_page(PAGINATION_SIZE, None)
        self.assertIsNone(page.next_token)
        self.assertEqual(page.entries, _fns("a"))

    def test_missing_functions_key_is_empty_page(self) -> None:
        page = LambdaClient(_FakeBotoClient([{}])).list_page(PAGINATION_SIZE, None)
        self.assertEqual(page, Page((), None))

    def test_client_error_becomes_retrieval_error(self) -> None:
        err = ClientError({"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "ListFunctions")
        boto = _FakeBotoClient([{"Functions": [], "NextMarker": "M1"}, err])
        with self.assertRaises(RetrievalError) as ctx:
            LambdaClient(boto).get_all_functions()
        self.assertIs(ctx.exception.__cause__, err)
        self.assertEqual(ctx.exception.page_number, 2)
        self.assertIn("AccessDeniedException", str(ctx.exception))
        self.assertEqual(len(boto.calls), 2)

    def test_transport_error_becomes_retrieval_error(self) -> None:
        err = EndpointConnectionError(endpoint_url="https://lambda.example.invalid")
        with self.assertRaises(RetrievalError) as ctx:
            LambdaClient(_FakeBotoClient([err])).get_all_functions()
        self.assertEqual(ctx.exception.page_number, 1)


if __name__ == "__main__":
    unittest.main()
