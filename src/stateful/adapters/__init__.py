"""
Adapters layer: concrete collaborators behind the domain ports.
"""

from __future__ import annotations
