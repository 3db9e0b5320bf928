# coursehub/services/payment_service.py
import os
import random
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from coursehub.models.purchase_model import PaymentReceipt
from coursehub.utils.course_stats import format_amount


class SimulatedPaymentGateway:
    """
    Stand-in for a real payment provider. Charges succeed with probability
    `success_rate` (PAYMENT_SUCCESS_RATE, default 1.0).
    """

    def __init__(self, success_rate: Optional[float] = None, currency: Optional[str] = None):
        if success_rate is None:
            success_rate = float(os.getenv("PAYMENT_SUCCESS_RATE", "1.0"))
        self.success_rate = min(max(success_rate, 0.0), 1.0)
        self.currency = currency or os.getenv("CURRENCY", "USD")

    def charge(self, purchase: Dict[str, Any]) -> PaymentReceipt:
        is_success = random.random() < self.success_rate
        return PaymentReceipt(
            success=is_success,
            transactionId=f"TRANS_{uuid.uuid4().hex[:9].upper()}" if is_success else None,
            amount=format_amount(purchase["amount"]),
            currency=self.currency,
            timestamp=datetime.utcnow().isoformat() + "Z",
            status="completed" if is_success else "failed",
            paymentMethod="test_card",
            orderId=str(purchase["_id"]),
        )
