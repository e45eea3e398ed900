"""
Advisory presentation.

Modules:
    warning_presenter - WarningPresenter for single product and cart pages
"""

from .warning_presenter import WarningPresenter, format_platforms

__all__ = ['WarningPresenter', 'format_platforms']
