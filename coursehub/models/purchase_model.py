from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PurchaseIn(BaseModel):
    courseId: str = Field(..., min_length=1)


class PaymentReceipt(BaseModel):
    success: bool
    transactionId: Optional[str] = None
    amount: str
    currency: str
    timestamp: str
    status: str
    paymentMethod: str
    orderId: str
