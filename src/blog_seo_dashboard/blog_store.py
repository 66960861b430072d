"""
Blog storage interface and a simple in-memory implementation.

The dashboard only needs three operations from storage: list all blogs,
fetch one by id, and replace a blog's `seo` document. Real deployments
provide their own BlogStore; InMemoryBlogStore backs the CLI (seeded from
a JSON export) and the tests.
"""

import copy
import json
import threading
from pathlib import Path
from typing import Any, Protocol, Union

from .models import Blog


class BlogStoreError(Exception):
    """Raised when blog data cannot be loaded or saved."""
    pass


class BlogNotFoundError(KeyError):
    """Raised when no blog exists for the requested id."""

    def __init__(self, blog_id: str):
        super().__init__(blog_id)
        self.blog_id = blog_id

    def __str__(self) -> str:
        return f"Blog not found: {self.blog_id}"


class BlogStore(Protocol):
    """Minimal storage contract used by the API and the bulk updater."""

    def list_blogs(self) -> list[Blog]:
        ...

    def get_blog(self, blog_id: str) -> Blog:
        ...

    def update_seo(self, blog_id: str, seo: dict[str, Any]) -> Blog:
        ...


class InMemoryBlogStore:
    """Thread-safe dict-backed BlogStore. Returned blogs are copies."""

    def __init__(self, blogs: Union[list[Blog], None] = None):
        self._lock = threading.Lock()
        self._blogs: dict[str, Blog] = {}
        for blog in blogs or []:
            self._blogs[blog.id] = copy.deepcopy(blog)

    def __len__(self) -> int:
        return len(self._blogs)

    def list_blogs(self) -> list[Blog]:
        with self._lock:
            return [copy.deepcopy(blog) for blog in self._blogs.values()]

    def get_blog(self, blog_id: str) -> Blog:
        with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None:
                raise BlogNotFoundError(blog_id)
            return copy.deepcopy(blog)

    def update_seo(self, blog_id: str, seo: dict[str, Any]) -> Blog:
        if not isinstance(seo, dict):
            raise BlogStoreError("seo must be a JSON object")
        with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None:
                raise BlogNotFoundError(blog_id)
            blog.seo = copy.deepcopy(seo)
            return copy.deepcopy(blog)


def load_blogs(file_path: Union[str, Path]) -> list[Blog]:
    """
    Load blogs from a JSON export.

    The file holds either a list of blog objects or an object with a
    "blogs" list.

    Args:
        file_path: Path to the JSON file.

    Returns:
        List of Blog objects.

    Raises:
        BlogStoreError: If the file is missing or malformed.
    """
    path = Path(file_path)

    if not path.exists():
        raise BlogStoreError(f"File not found: {file_path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BlogStoreError(f"Failed to read blog export: {e}")

    if isinstance(data, dict):
        data = data.get("blogs")
    if not isinstance(data, list):
        raise BlogStoreError("Blog export must be a list of blog objects")

    blogs: list[Blog] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or "id" not in item:
            raise BlogStoreError(f"Entry {index} is missing an 'id'")
        blogs.append(Blog.from_dict(item))

    return blogs


def save_blogs(blogs: list[Blog], file_path: Union[str, Path]) -> Path:
    """Write blogs back out as a JSON list."""
    path = Path(file_path)
    try:
        path.write_text(
            json.dumps([blog.to_dict() for blog in blogs], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise BlogStoreError(f"Failed to write blog export: {e}")
    return path
