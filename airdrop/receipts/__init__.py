"""
Receipts Module

Audit records for accepted claims.
"""

from .models import ClaimReceipt, generate_receipt_id
from .recorder import ReceiptRecorder

__all__ = [
    "ClaimReceipt",
    "generate_receipt_id",
    "ReceiptRecorder",
]
