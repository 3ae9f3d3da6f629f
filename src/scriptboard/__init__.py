"""ScriptBoard: screenplay breakdown and Kanban production board.

Scripts are segmented into scenes, scenes are analysed on demand, and a
Kanban engine moves them through production columns backed by a scene
store with live snapshots.
"""

__version__ = "0.1.0"
__author__ = "ScriptBoard Contributors"

__all__ = ["__version__"]
