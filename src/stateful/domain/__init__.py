"""
Domain layer: the transition engine itself.

Depends only on the standard library and pydantic; never on adapters,
application or api modules.
"""

from __future__ import annotations
