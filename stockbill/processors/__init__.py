"""
Invoice computation processors: pricing, numbering, line editing and validation.
The invoice creation transaction lives in ``invoice_flow``.
"""

from .pricing import calculate_totals, build_line_item, clamp_discount
from .numbering import next_invoice_number, InvoiceRecordBuilder
from .line_item_editor import LineItemEditor, EditorState, RowState
from .error_tracker import ErrorTracker

__all__ = [
    'calculate_totals',
    'build_line_item',
    'clamp_discount',
    'next_invoice_number',
    'InvoiceRecordBuilder',
    'LineItemEditor',
    'EditorState',
    'RowState',
    'ErrorTracker'
]
