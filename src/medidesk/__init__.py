"""MediDesk - terminal front end for hospital operations.

Packages:
- core: keys, routing contract, focus cursor, menus, dialogs, transient messages
- tui: screens, dispatcher and the Textual host application
- data: user persistence collaborator
- config: layered settings
- utils: logging
- cli: Typer entry point
"""

__version__ = "0.1.0"
