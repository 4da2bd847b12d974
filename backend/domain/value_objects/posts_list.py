"""
PostsList Value Object

A page of forum posts paired with the number of posts matching the same
filter, so a caller can render "showing 1-20 of N".
"""

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class PostsList:
    """Immutable page of posts with its total row count."""

    posts: Tuple
    total_count: int

    def __post_init__(self):
        object.__setattr__(self, "posts", tuple(self.posts))
        if self.total_count < 0:
            raise ValueError(f"Total count cannot be negative: {self.total_count}")

    def __iter__(self) -> Iterator:
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)
