"""Enum definitions for bill fields and export formats."""

from enum import Enum


class TenantField(str, Enum):
    """Editable fields of a tenant reading."""

    NAME = "name"
    PREVIOUS = "previous"
    CURRENT = "current"


class ExportFormat(str, Enum):
    """Downloadable report formats."""

    PDF = "pdf"
    XLSX = "xlsx"
    PNG = "png"
