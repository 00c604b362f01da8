import pytest
from razorpay.errors import BadRequestError

from hospital import config
from hospital.routes import payments as payment_routes
from hospital.services import payments
from hospital.services.payments import (
    PaymentConfigError,
    PaymentGatewayError,
    RazorpayService,
    compute_signature,
    verify_payment_signature,
)


@pytest.fixture
def razorpay_keys(monkeypatch):
    monkeypatch.setattr(config, "RAZORPAY_KEY_ID", "rzp_test_abc")
    monkeypatch.setattr(config, "RAZORPAY_KEY_SECRET", "secret")


class FakeRazorpayClient:
    """Stands in for ``razorpay.Client``; records order payloads."""

    sent = []
    error = None

    def __init__(self, auth):
        self.auth = auth
        self.order = self

    def create(self, data):
        if self.error:
            raise self.error
        self.sent.append(data)
        return {"id": "order_1", "amount": data["amount"], "currency": data["currency"], "receipt": data["receipt"]}


@pytest.fixture
def gateway_orders(monkeypatch, razorpay_keys):
    monkeypatch.setattr(FakeRazorpayClient, "sent", [])
    monkeypatch.setattr(FakeRazorpayClient, "error", None)
    monkeypatch.setattr(payments.razorpay, "Client", FakeRazorpayClient)
    return FakeRazorpayClient.sent


def test_signature_verification():
    signature = compute_signature("order_1", "pay_1", "secret")
    assert verify_payment_signature("order_1", "pay_1", signature, secret="secret")
    assert not verify_payment_signature("order_1", "pay_2", signature, secret="secret")
    assert not verify_payment_signature("order_1", "pay_1", "", secret="secret")


def test_signature_needs_secret(monkeypatch):
    monkeypatch.setattr(config, "RAZORPAY_KEY_SECRET", "")
    with pytest.raises(PaymentConfigError):
        verify_payment_signature("order_1", "pay_1", "sig")


def test_verify_endpoint(client, razorpay_keys):
    payload = {
        "razorpay_order_id": "order_1",
        "razorpay_payment_id": "pay_1",
        "razorpay_signature": compute_signature("order_1", "pay_1", "secret"),
    }
    response = client.post("/api/verify-payment", json=payload)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Payment verified successfully",
        "payment_id": "pay_1",
        "order_id": "order_1",
    }

    payload["razorpay_signature"] = "0" * 64
    response = client.post("/api/verify-payment", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid payment signature"


def test_verify_endpoint_missing_fields(client, razorpay_keys):
    response = client.post("/api/verify-payment", json={"razorpay_order_id": "order_1"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing payment details"


def test_create_order_in_paise(client, gateway_orders):
    response = client.post("/api/create-order", json={"amount": 499.5, "service": "Online Consultation", "patient_name": "Ravi"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["key"] == "rzp_test_abc"
    assert body["order"]["id"] == "order_1"
    assert body["order"]["amount"] == 49950

    sent = gateway_orders[0]
    assert sent["currency"] == "INR"
    assert sent["receipt"].startswith("rcpt_")
    assert sent["notes"]["service"] == "Online Consultation"
    assert sent["notes"]["patient_name"] == "Ravi"


@pytest.mark.parametrize("amount", [0, -10])
def test_create_order_rejects_non_positive_amount(client, gateway_orders, amount):
    response = client.post("/api/create-order", json={"amount": amount})
    assert response.status_code == 400
    assert gateway_orders == []


def test_create_order_unconfigured(client, monkeypatch):
    monkeypatch.setattr(config, "RAZORPAY_KEY_ID", "")
    monkeypatch.setattr(config, "RAZORPAY_KEY_SECRET", "")
    response = client.post("/api/create-order", json={"amount": 100})
    assert response.status_code == 500
    assert response.json()["detail"] == "Payment gateway not configured. Contact admin."


def test_malformed_key_id(monkeypatch):
    monkeypatch.setattr(config, "RAZORPAY_KEY_ID", "key_abc")
    monkeypatch.setattr(config, "RAZORPAY_KEY_SECRET", "secret")
    with pytest.raises(PaymentConfigError):
        RazorpayService()


def test_gateway_auth_failure(client, monkeypatch):
    async def rejected(amount, **kwargs):
        raise PaymentGatewayError("Razorpay order creation failed", 401)

    monkeypatch.setattr(payment_routes, "create_order", rejected)
    response = client.post("/api/create-order", json={"amount": 100})
    assert response.status_code == 500
    assert response.json()["detail"] == "Payment gateway authentication failed. Check API keys."


def test_receipt_id_format():
    from hospital.utils.helpers import new_receipt_id

    prefix, millis, suffix = new_receipt_id().split("_")
    assert prefix == "rcpt"
    assert millis.isdigit()
    assert len(suffix) == 6


@pytest.mark.parametrize("description,detail", [
    ("Authentication failed", "Payment gateway authentication failed. Check API keys."),
    ("The amount must be atleast INR 1.00", "Invalid request to payment gateway."),
])
def test_gateway_rejections_mapped(client, gateway_orders, monkeypatch, description, detail):
    monkeypatch.setattr(FakeRazorpayClient, "error", BadRequestError(description))
    response = client.post("/api/create-order", json={"amount": 100})
    assert response.status_code == 500
    assert response.json()["detail"] == detail


def test_sdk_client_gets_configured_keys(gateway_orders):
    service = RazorpayService()
    assert service.client.auth == ("rzp_test_abc", "secret")
