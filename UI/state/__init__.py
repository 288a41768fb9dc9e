"""
State management for the rental console.

Entity screens keep their data in an EntityController (one per resource);
the table keeps its own column and menu state in TableViewState.
"""
