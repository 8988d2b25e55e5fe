"""Publishers for the mobile event stream, one module per feature.

Each publisher builds a payload and emits it; call them from
``transaction.on_commit`` so clients never see uncommitted state.
"""
