import logging
from fastapi import APIRouter, HTTPException
from hospital import config
from hospital.schemas import OrderRequest, PaymentVerification
from hospital.services.payments import (
    PaymentConfigError,
    PaymentGatewayError,
    create_order,
    verify_payment_signature,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-order")
async def create_payment_order(payload: OrderRequest):
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Invalid amount")

    try:
        order = await create_order(
            payload.amount,
            service=payload.service,
            patient_name=payload.patient_name,
            patient_email=payload.patient_email,
            patient_phone=payload.patient_phone,
        )
    except PaymentConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except PaymentGatewayError as e:
        if e.status_code == 401:
            logger.error("Razorpay rejected the API keys, regenerate them in the dashboard")
            detail = "Payment gateway authentication failed. Check API keys."
        elif e.status_code == 400:
            detail = "Invalid request to payment gateway."
        else:
            detail = "Failed to create payment order"
        raise HTTPException(status_code=500, detail=detail)

    return {
        "success": True,
        "order": {
            "id": order["id"],
            "amount": order["amount"],
            "currency": order["currency"],
            "receipt": order.get("receipt"),
        },
        "key": config.RAZORPAY_KEY_ID,
    }


@router.post("/verify-payment")
async def verify_payment(payload: PaymentVerification):
    if not (payload.razorpay_order_id and payload.razorpay_payment_id and payload.razorpay_signature):
        raise HTTPException(status_code=400, detail="Missing payment details")

    try:
        valid = verify_payment_signature(
            payload.razorpay_order_id, payload.razorpay_payment_id, payload.razorpay_signature
        )
    except PaymentConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not valid:
        logger.error(f"Payment signature mismatch for order {payload.razorpay_order_id}")
        raise HTTPException(status_code=400, detail="Invalid payment signature")

    logger.info(f"Payment verified: {payload.razorpay_payment_id}")
    return {
        "success": True,
        "message": "Payment verified successfully",
        "payment_id": payload.razorpay_payment_id,
        "order_id": payload.razorpay_order_id,
    }
