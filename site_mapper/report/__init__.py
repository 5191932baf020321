"""site_mapper.report: writers for the finished site map."""

from __future__ import annotations

from .text_report import render_text

__all__ = ["render_text"]
