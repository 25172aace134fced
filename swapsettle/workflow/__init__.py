"""swapsettle.workflow -- Temporal.io boundary for settlement evaluation.

Nothing is re-exported here. The workflow sandbox imports this package before
settlement_workflow's passed-through imports run, so it must stay free of
modules that load the crypto stack.
"""
