"""Payment gateway configuration: command, handler and queries."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Dict, String
from protean.utils.globals import current_domain

from content.domain import content
from content.gateways.gateway import PaymentGateway, default_gateways
from shared.logging import get_logger

logger = get_logger(__name__)


@content.repository(part_of=PaymentGateway)
class PaymentGatewayRepository:
    def list_gateways(self) -> list[PaymentGateway]:
        """All gateways, seeding the defaults on first read."""
        gateways = self.query.limit(None).order_by("name").all().items
        if not gateways:
            for gateway in default_gateways():
                self.add(gateway)
            gateways = self.query.limit(None).order_by("name").all().items
            logger.info("Seeded default payment gateways", count=len(gateways))
        return gateways

    def get_gateway(self, gateway_id) -> PaymentGateway:
        self.list_gateways()
        gateway = self.get_or_none(gateway_id)
        if gateway is None:
            raise ObjectNotFoundError("Payment gateway not found")
        return gateway


@content.command(part_of="PaymentGateway")
class ConfigurePaymentGateway:
    gateway_id: String(required=True, max_length=50)
    enabled: Boolean()
    test_mode: Boolean()
    credentials: Dict()


@content.command_handler(part_of=PaymentGateway)
class PaymentGatewayHandler:
    @handle(ConfigurePaymentGateway)
    def configure(self, command):
        gateways = current_domain.repository_for(PaymentGateway)
        gateway = gateways.get_gateway(command.gateway_id)
        gateway.configure(enabled=command.enabled, test_mode=command.test_mode, credentials=command.credentials)
        gateways.add(gateway)
        logger.info(
            "Payment gateway updated",
            gateway_id=gateway.id,
            enabled=gateway.enabled,
            test_mode=gateway.test_mode,
        )
        return gateway


def list_gateways() -> list[PaymentGateway]:
    return current_domain.repository_for(PaymentGateway).list_gateways()


def get_gateway(gateway_id) -> PaymentGateway:
    return current_domain.repository_for(PaymentGateway).get_gateway(gateway_id)
