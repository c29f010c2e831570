"""
quantum-start Dashboard API.

Launch with: quantum-start serve
Or programmatically: from quantum_start.dashboard import launch; launch()
"""

from quantum_start.dashboard.server import create_app, launch

__all__ = ["create_app", "launch"]
