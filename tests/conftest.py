"""Shared fixtures and stubs for menu tests."""

import asyncio
from typing import Any, Callable, Optional, Sequence

import pytest

from codemenu.domain.types import (
    CodeLabel,
    Completion,
    CompletionKind,
    Documentation,
    MultiLinePlainText,
)


class StubCompletionProvider:
    """Completion provider that records resolve calls.

    Resolving fills in documentation unless ``documentation`` is None.
    """

    def __init__(
        self,
        documentation: Optional[str] = "Resolved docs",
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.documentation = documentation
        self.error = error
        self.gate = gate
        self.calls: list[list[int]] = []

    async def resolve_completions(
        self, buffer: Any, completion_indices: Sequence[int], completions: list[Completion]
    ) -> bool:
        self.calls.append(list(completion_indices))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.documentation is None:
            return False
        for index in completion_indices:
            completions[index].documentation = MultiLinePlainText(self.documentation)
        return True


class RecordingRenderer:
    """Renderer that records every request it receives."""

    def __init__(self):
        self.scrolled_to: list[int] = []
        self.changes = 0

    def scroll_to_item(self, index: int) -> None:
        self.scrolled_to.append(index)

    def menu_changed(self) -> None:
        self.changes += 1


class StubActionProvider:
    def __init__(self, id: str = "lsp"):
        self.id = id


def make_completion(
    label: str,
    sort_text: Optional[str] = None,
    kind: Optional[CompletionKind] = None,
    documentation: Optional[Documentation] = None,
    resolved: bool = False,
    deprecated: bool = False,
) -> Completion:
    return Completion(
        label=CodeLabel(label),
        new_text=label,
        sort_text=sort_text,
        kind=kind,
        documentation=documentation,
        resolved=resolved,
        deprecated=deprecated,
    )


@pytest.fixture
def provider() -> StubCompletionProvider:
    return StubCompletionProvider()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def completion_factory() -> Callable[..., Completion]:
    return make_completion
