"""
Runtime services around the round engine: deferred actions and the session runner.
"""
