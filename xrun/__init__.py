"""
xrun - turn raw CLI output into interactive chat messages.

Parses whitespace-aligned command output (kubectl, helm, ...) and renders it
as dropdowns, previews and row-scoped actions driven by YAML templates.
"""

__version__ = "0.1.0"
__author__ = "xrun Contributors"
