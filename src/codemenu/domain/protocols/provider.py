"""Candidate source protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from codemenu.domain.types import Completion

__all__ = ["CodeActionProvider", "CompletionProvider"]


class CompletionProvider(Protocol):
    """Source of completion candidates that can resolve extra detail on demand."""

    async def resolve_completions(
        self,
        buffer: Any,
        completion_indices: Sequence[int],
        completions: list["Completion"],
    ) -> bool:
        """Resolve the given candidates in place.

        Args:
            buffer: The buffer the completions were requested for
            completion_indices: Indices into ``completions`` to resolve
            completions: The menu's shared candidate list

        Returns:
            True if any candidate changed

        Raises:
            Exception: Any failure of the underlying source; callers log it
        """
        ...


class CodeActionProvider(Protocol):
    """Handle of the provider that produced a code action."""

    @property
    def id(self) -> str:
        """Stable identifier of the provider."""
        ...
