"""Test utilities for waypoint applications::

    from waypoint.testing import TestClient, build_request
"""

from waypoint.testing.client import TestClient, build_request

__all__ = ["TestClient", "build_request"]
