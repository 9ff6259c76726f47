"""Domain protocols - contracts of the menus' collaborators.

Using protocols keeps the menus independent of any particular language
server client or UI toolkit and makes them easy to drive with stubs in tests.
"""

from codemenu.domain.protocols.provider import CodeActionProvider, CompletionProvider
from codemenu.domain.protocols.renderer import MenuRenderer, NullRenderer

__all__ = [
    "CodeActionProvider",
    "CompletionProvider",
    "MenuRenderer",
    "NullRenderer",
]
