"""Parsers for the cluster controller."""

from kubedash.controllers.cluster.parsers.record_parser import RecordParser

__all__ = ["RecordParser"]
