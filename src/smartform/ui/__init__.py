"""
Browser UI for SmartForm, built with gradio.
"""

from smartform.ui.app import build_app, main

__all__ = ["build_app", "main"]
