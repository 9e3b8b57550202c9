"""
Invoke collection loaded by `inv` from the repository root.
"""

from sca import ns  # noqa: F401
