"""ViewModel package for UI state and command surfaces.

Call context:
    ``acctab/web_ui/runtime.py`` imports concrete viewmodels from this package
    to bind widget callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types, use-case callables and the
    update orchestrator only. I/O adapters remain outside.

Responsibilities:
    - Expose mutable UI state and command intent callbacks.
    - Transform typed domain records into view-facing rows.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
