import asyncio
import hashlib
import hmac
import logging
from typing import Any, Optional

import razorpay
from razorpay.errors import BadRequestError, GatewayError, ServerError

from hospital import config
from hospital.utils.helpers import new_receipt_id


logger = logging.getLogger(__name__)


class PaymentConfigError(Exception):
    pass


class PaymentGatewayError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RazorpayService:
    """Thin wrapper over the Razorpay SDK client"""

    def __init__(self):
        self.key_id = (config.RAZORPAY_KEY_ID or "").strip()
        self.key_secret = (config.RAZORPAY_KEY_SECRET or "").strip()
        if not self.key_id or not self.key_secret:
            logger.error("Razorpay keys missing")
            raise PaymentConfigError("Payment gateway not configured. Contact admin.")
        if not self.key_id.startswith(("rzp_live_", "rzp_test_")):
            logger.error("Invalid Razorpay key id format")
            raise PaymentConfigError("Invalid payment gateway configuration.")
        self.client = razorpay.Client(auth=(self.key_id, self.key_secret))

    def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            return self.client.order.create(data=payload)
        except BadRequestError as e:
            logger.error(f"Razorpay rejected order: {e}")
            status = 401 if "authentication" in str(e).lower() else 400
            raise PaymentGatewayError("Razorpay order creation failed", status) from e
        except (GatewayError, ServerError) as e:
            logger.error(f"Razorpay order creation failed: {e}")
            raise PaymentGatewayError("Razorpay order creation failed", 502) from e


async def create_order(
    amount,
    service: Optional[str] = None,
    patient_name: Optional[str] = None,
    patient_email: Optional[str] = None,
    patient_phone: Optional[str] = None,
) -> dict:
    """Create a Razorpay order for ``amount`` rupees; the gateway works in paise."""
    gateway = RazorpayService()
    amount_in_paise = int(round(amount * 100))
    logger.info(f"Creating order: ₹{amount} = {amount_in_paise} paise")

    # The SDK uses blocking requests calls
    order = await asyncio.to_thread(gateway.create_order, {
        "amount": amount_in_paise,
        "currency": config.PAYMENT_CURRENCY,
        "receipt": new_receipt_id(),
        "payment_capture": 1,
        "notes": {
            "service": service or "Consultation",
            "patient_name": patient_name or "",
            "patient_email": patient_email or "",
            "patient_phone": patient_phone or "",
            "hospital": config.HOSPITAL_NAME,
        },
    })
    logger.info(f"Order created: {order['id']} ({order['amount']} {order['currency']})")
    return order


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), f"{order_id}|{payment_id}".encode("utf-8"), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    secret = secret if secret is not None else config.RAZORPAY_KEY_SECRET
    if not secret:
        raise PaymentConfigError("Payment gateway not configured. Contact admin.")
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(order_id, payment_id, secret), signature)
