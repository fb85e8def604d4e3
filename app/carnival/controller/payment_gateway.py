"""Payment gateway implementations.

The application picks one gateway at startup (``build_payment_gateway``) and
stores it on ``app.state``. Handlers only ever talk to that object, so demo
mode never leaks into booking or payment logic.
"""

import asyncio
import hashlib
import hmac
import logging
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel

from carnival import config

logger = logging.getLogger(__name__)

DEMO_SECRET = "demo"


class PaymentInit(BaseModel):
    success: bool
    authorization_url: Optional[str] = None
    access_code: Optional[str] = None
    reference: Optional[str] = None
    error: Optional[str] = None


class PaymentVerification(BaseModel):
    success: bool
    reference: Optional[str] = None
    channel: Optional[str] = None
    amount: Optional[int] = None
    data: Dict[str, Any] = {}
    error: Optional[str] = None


def convert_to_kobo(naira_amount: float) -> int:
    return int(round(naira_amount * 100))


def convert_from_kobo(kobo_amount: int) -> float:
    return kobo_amount / 100


def compute_signature(secret: str, payload: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha512).hexdigest()


class PaymentGateway:
    secret = ""

    async def initialize(self, email: str, amount: int, reference: str, metadata: Optional[dict] = None,
                         subaccount: Optional[str] = None, transaction_charge: Optional[int] = None,
                         callback_url: Optional[str] = None) -> PaymentInit:
        raise NotImplementedError

    async def verify(self, reference: str) -> PaymentVerification:
        raise NotImplementedError

    def verify_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        if not signature:
            return False
        expected = compute_signature(self.secret, payload)
        return hmac.compare_digest(expected, signature)


class PaystackGateway(PaymentGateway):
    def __init__(self, secret_key: str, base_url: str = config.PAYSTACK_BASE_URL,
                 timeout: float = config.PAYMENT_TIMEOUT):
        self.secret = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.secret}",
            "Content-Type": "application/json",
        }

    async def initialize(self, email, amount, reference, metadata=None, subaccount=None,
                         transaction_charge=None, callback_url=None):
        payload = {
            "email": email,
            "amount": amount,
            "reference": reference,
            "metadata": metadata or {},
            "callback_url": callback_url or f"{config.APP_URL}/api/payments/verify",
        }
        if subaccount:
            payload["subaccount"] = subaccount
            payload["transaction_charge"] = transaction_charge

        def post_blocking():
            response = requests.post(
                f"{self.base_url}/transaction/initialize",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
            return response.json()

        try:
            result = await asyncio.to_thread(post_blocking)
        except (requests.RequestException, ValueError) as e:
            logger.error("Paystack initialize error: %s", e)
            return PaymentInit(success=False, error="Payment initialization failed")

        if not result.get("status"):
            return PaymentInit(success=False, error=result.get("message") or "Payment initialization failed")
        data = result.get("data") or {}
        return PaymentInit(
            success=True,
            authorization_url=data.get("authorization_url"),
            access_code=data.get("access_code"),
            reference=data.get("reference", reference),
        )

    async def verify(self, reference):
        def get_blocking():
            response = requests.get(
                f"{self.base_url}/transaction/verify/{reference}",
                headers=self._headers(),
                timeout=self.timeout,
            )
            return response.json()

        try:
            result = await asyncio.to_thread(get_blocking)
        except (requests.RequestException, ValueError) as e:
            logger.error("Paystack verify error: %s", e)
            return PaymentVerification(success=False, reference=reference, error="Payment verification failed")

        data = result.get("data") or {}
        if not result.get("status") or data.get("status") != "success":
            return PaymentVerification(
                success=False,
                reference=reference,
                error=result.get("message") or "Payment verification failed",
            )
        return PaymentVerification(
            success=True,
            reference=data.get("reference", reference),
            channel=data.get("channel"),
            amount=data.get("amount"),
            data=data,
        )


class DemoPaymentGateway(PaymentGateway):
    """Approves everything. Used when no Paystack secret is configured."""

    secret = DEMO_SECRET

    async def initialize(self, email, amount, reference, metadata=None, subaccount=None,
                         transaction_charge=None, callback_url=None):
        return PaymentInit(
            success=True,
            authorization_url=f"{config.APP_URL}/demo-payment-success",
            access_code="demo_access_code",
            reference=reference,
        )

    async def verify(self, reference):
        return PaymentVerification(success=True, reference=reference, channel="demo", data={"status": "success"})


def build_payment_gateway(secret_key: Optional[str] = None) -> PaymentGateway:
    secret_key = config.PAYSTACK_SECRET_KEY if secret_key is None else secret_key
    if not secret_key or secret_key == DEMO_SECRET:
        logger.warning("PAYSTACK_SECRET_KEY not set, payments run in demo mode")
        return DemoPaymentGateway()
    return PaystackGateway(secret_key)
