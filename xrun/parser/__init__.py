"""Parsers that recover tables from plain-text command output."""

from xrun.parser.space_table import Table, TableOutput, TableSpace

__all__ = ["Table", "TableOutput", "TableSpace"]
