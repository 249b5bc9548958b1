"""Specifier classification, CDN origin resolution and package parsing."""

from .classifier import classify, is_bare, is_relative, is_virtual_path
from .models import CdnTarget, ParsedSpecifier
from .origin import get_cdn_origin, get_cdn_style, get_pure_import_path, resolve_origin
from .parser import parse_package_specifier

__all__ = [
    "CdnTarget",
    "ParsedSpecifier",
    "classify",
    "get_cdn_origin",
    "get_cdn_style",
    "get_pure_import_path",
    "is_bare",
    "is_relative",
    "is_virtual_path",
    "parse_package_specifier",
    "resolve_origin",
]
