from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True, order=True)
class LambdaFunction:
    name: str


@dataclass(frozen=True)
class FunctionCatalog:
    """
    Complete, name-sorted listing of Lambda functions for one run.

    Names are compared ordinally (``"Apple" < "apple" < "zebra"``). Duplicate names
    returned by the API are kept as-is.
    """

    functions: Tuple[LambdaFunction, ...] = ()

    @classmethod
    def from_unsorted(cls, functions: Iterable[LambdaFunction]) -> "FunctionCatalog":
        return cls(tuple(sorted(functions, key=lambda f: f.name)))

    def __len__(self) -> int:
        return len(self.functions)

    def __getitem__(self, idx: int) -> LambdaFunction:
        return self.functions[idx]

    def __iter__(self) -> Iterator[LambdaFunction]:
        return iter(self.functions)

    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.functions)
