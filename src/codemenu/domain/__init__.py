"""Domain layer - candidate types and collaborator contracts.

This layer contains:
- protocols: Interfaces of the collaborators the menus call into
- types: Candidates, menu entries and menu anchoring types

The domain layer has NO dependencies on the application or presentation layers.
"""
