"""Gradio user interface for Warkah Prompt Studio.

Modules
-------
app
    Blocks layout and the ``warkah-ui`` entry point.
components
    ``ModePanel``, the shared layout of the two tabs.
handlers
    Gradio event handlers.
orchestrator
    ``SessionOrchestrator``, the per-mode state machine.
state
    Reducers over immutable ``SessionState`` values.
models
    UI data models and message constants.
validation
    ``ValidationError`` and input checks.
"""
