"""
Top‑level package for the NexusHR data layer.

This file makes ``nexus_hr`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``nexus_hr.app.main``.  The package provides no public exports; all
functionality lives in submodules under ``app``.
"""

__all__ = []
