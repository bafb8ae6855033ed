"""
Node-local service arguments and restart control for a cluster node agent.
"""
