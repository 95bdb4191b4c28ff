"""Payment gateway configuration records."""

from protean.fields import Boolean, Dict, String

from content.domain import content

# Credential fields every gateway must have filled in before it can take payments
REQUIRED_CREDENTIALS = {
    "stripe": ("publicKey", "secretKey"),
    "paypal": ("clientId", "clientSecret"),
    "elavon": ("merchantId", "apiKey", "terminalId"),
}


@content.aggregate(schema_name="payment_gateways")
class PaymentGateway:
    # ``id`` is the gateway's slug, e.g. "stripe"
    name = String(required=True, max_length=100)
    enabled = Boolean(default=False)
    test_mode = Boolean(default=True)
    credentials = Dict()

    @property
    def is_configured(self) -> bool:
        required = REQUIRED_CREDENTIALS.get(self.id, tuple(self.credentials))
        return all((self.credentials.get(key) or "").strip() for key in required)

    def masked_credentials(self) -> dict[str, str]:
        """Credential values with all but the last four characters hidden."""
        return {key: mask_secret(value) for key, value in self.credentials.items()}

    def configure(self, enabled=None, test_mode=None, credentials=None):
        """Apply the given changes; credentials are merged key by key."""
        if enabled is not None:
            self.enabled = enabled
        if test_mode is not None:
            self.test_mode = test_mode
        if credentials:
            self.credentials = {**self.credentials, **credentials}


def mask_secret(value: str) -> str:
    if not value:
        return ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def default_gateways() -> list[PaymentGateway]:
    return [
        PaymentGateway(
            id="stripe",
            name="Stripe",
            enabled=False,
            test_mode=True,
            credentials={"publicKey": "", "secretKey": "", "webhookSecret": ""},
        ),
        PaymentGateway(
            id="paypal",
            name="PayPal",
            enabled=False,
            test_mode=True,
            credentials={"clientId": "", "clientSecret": "", "webhookId": ""},
        ),
        PaymentGateway(
            id="elavon",
            name="Elavon",
            enabled=True,
            test_mode=False,
            credentials={"merchantId": "", "apiKey": "", "terminalId": ""},
        ),
    ]
