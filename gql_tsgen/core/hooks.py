"""Hooks around a generation run.

A pre-generate hook sees the collected documents before anything is
generated and decides which of them take part in the run. A
post-generate hook sees the text of every file (internal shapes,
artifacts and the index) just before it is written.

Example usage:
    from gql_tsgen.core.hooks import HookRunner, PostGenerateHook

    class StripBlankLines(PostGenerateHook):
        def post_generate(self, filename, content):
            return "\\n".join(line for line in content.splitlines() if line) + "\\n"

    hooks = HookRunner()
    hooks.add_post_hook(StripBlankLines())
"""

from fnmatch import fnmatchcase
from typing import Iterable, Protocol, runtime_checkable

from .documents import CollectedDocument, DocumentKind


@runtime_checkable
class PreGenerateHook(Protocol):
    """Narrows or reorders the documents of a run.

    Example:
        class OnlyQueries(PreGenerateHook):
            def pre_generate(self, documents):
                return [d for d in documents if d.kind == DocumentKind.OPERATION]
    """

    def pre_generate(self, documents: list[CollectedDocument]) -> list[CollectedDocument]:
        """Called once, before the internal shapes are generated.

        Args:
            documents: Every collected document of the run

        Returns:
            The documents to generate for, in the order artifacts should be indexed
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Transforms generated text before it is written."""

    def post_generate(self, filename: str, content: str) -> str:
        """Called for each generated file.

        Args:
            filename: Full path the text will be written to
            content: The generated TypeScript

        Returns:
            The text to write instead
        """
        ...


class AddHeaderHook:
    """Prefixes every generated file with a comment block.

    Example:
        hook = AddHeaderHook("/* eslint-disable */")
    """

    def __init__(self, header: str):
        self.header = header.rstrip("\n") + "\n\n"

    def post_generate(self, _filename: str, content: str) -> str:
        return self.header + content


class FilterDocumentsHook:
    """Keeps documents whose names match glob patterns.

    A document is kept when it matches at least one include pattern (or no
    include patterns are given), matches no exclude pattern, and its kind is
    one of kinds (or kinds is not given).

    Example:
        # Skip scratch queries and every fragment
        hook = FilterDocumentsHook(exclude=["Scratch*"], kinds=[DocumentKind.OPERATION])
    """

    def __init__(
        self,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
        kinds: Iterable[DocumentKind] | None = None,
    ):
        self.include = list(include)
        self.exclude = list(exclude)
        self.kinds = set(kinds) if kinds is not None else None

    def matches(self, doc: CollectedDocument) -> bool:
        if self.kinds is not None and doc.kind not in self.kinds:
            return False
        if any(fnmatchcase(doc.name, pattern) for pattern in self.exclude):
            return False
        return not self.include or any(fnmatchcase(doc.name, pattern) for pattern in self.include)

    def pre_generate(self, documents: list[CollectedDocument]) -> list[CollectedDocument]:
        return [doc for doc in documents if self.matches(doc)]


class HookRunner:
    """Applies registered hooks in registration order."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks: list[PreGenerateHook] = list(pre_hooks)
        self.post_hooks: list[PostGenerateHook] = list(post_hooks)

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, documents: list[CollectedDocument]) -> list[CollectedDocument]:
        for hook in self.pre_hooks:
            documents = hook.pre_generate(documents)
        return documents

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
