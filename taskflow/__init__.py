"""taskflow - task lifecycle and Kanban synchronization core.

Role-based task tracking: a status state machine with actor-aware
authorization, optimistic drag-and-drop synchronization, checklist progress
and scoped dashboard counters.
"""

__version__ = "0.1.0"
