"""
Checklist menu core: configuration, action registry, selection loop and
the runner that executes the chosen actions.
"""
