"""codemenu - ranking and selection engine for editor completion and code-action menus."""

__version__ = "0.1.0"
