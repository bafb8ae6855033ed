"""
Higher-level methods to reconfigure and control node services.

Each public function in this module should:

- perform a complete task, as needed by a script or an agent request
- avoid non-idempotent calls unless required by a prior state change
- create and manage contexts for any resources needed by plumbing
"""
