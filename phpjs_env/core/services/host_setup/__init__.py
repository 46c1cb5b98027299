"""
Host setup service — the imperative provisioning procedure for a Debian host.

Layers, innermost first (each layer may only import from the ones above it
in this list):

    data          → constants and package lists. No logic.
    domain        → pure decisions: errors, release selection, answer parsing.
    detection     → read-only host probes.
    execution     → side effects: subprocesses, HTTP, apt, host files.
    orchestration → prompts and the ordered procedure.

Import from the layer modules directly; this package deliberately
re-exports nothing so that ``core.models.settings`` can read the data
layer without pulling in the procedure.
"""
