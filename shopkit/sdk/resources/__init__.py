"""Typed resource services built on the generic CRUD adapters."""

from shopkit.sdk.resources.abandoned_checkout import AbandonedCheckout, AbandonedCheckoutResource
from shopkit.sdk.resources.assigned_fulfillment_order import (
    AssignedFulfillmentOrder,
    AssignedFulfillmentOrderOptions,
    AssignedFulfillmentOrderResource,
)
from shopkit.sdk.resources.base import ListableResource, ReadOnlyResource, Resource
from shopkit.sdk.resources.carrier import CarrierService, CarrierServiceResource
from shopkit.sdk.resources.collect import Collect, CollectResource
from shopkit.sdk.resources.fulfillment import Fulfillment, FulfillmentResource
from shopkit.sdk.resources.fulfillment_event import FulfillmentEvent, FulfillmentEventResource
from shopkit.sdk.resources.fulfillment_request import (
    FulfillmentOrder,
    FulfillmentRequest,
    FulfillmentRequestResource,
)
from shopkit.sdk.resources.fulfillment_service import (
    FulfillmentServiceData,
    FulfillmentServiceOptions,
    FulfillmentServiceResource,
)
from shopkit.sdk.resources.gift_card import GiftCard, GiftCardResource
from shopkit.sdk.resources.inventory_level import (
    InventoryLevel,
    InventoryLevelAdjustOptions,
    InventoryLevelListOptions,
    InventoryLevelResource,
)
from shopkit.sdk.resources.metafield import Metafield, MetafieldResource, MetafieldType
from shopkit.sdk.resources.order_risk import OrderRisk, OrderRiskRecommendation, OrderRiskResource
from shopkit.sdk.resources.payments_transactions import (
    PaymentsTransaction,
    PaymentsTransactionResource,
    PaymentsTransactionsListOptions,
    PaymentsTransactionType,
)
from shopkit.sdk.resources.payouts import Payout, PayoutResource, PayoutsListOptions, PayoutStatus

__all__ = [
    "AbandonedCheckout",
    "AbandonedCheckoutResource",
    "AssignedFulfillmentOrder",
    "AssignedFulfillmentOrderOptions",
    "AssignedFulfillmentOrderResource",
    "CarrierService",
    "CarrierServiceResource",
    "Collect",
    "CollectResource",
    "Fulfillment",
    "FulfillmentEvent",
    "FulfillmentEventResource",
    "FulfillmentOrder",
    "FulfillmentRequest",
    "FulfillmentRequestResource",
    "FulfillmentResource",
    "FulfillmentServiceData",
    "FulfillmentServiceOptions",
    "FulfillmentServiceResource",
    "GiftCard",
    "GiftCardResource",
    "InventoryLevel",
    "InventoryLevelAdjustOptions",
    "InventoryLevelListOptions",
    "InventoryLevelResource",
    "ListableResource",
    "Metafield",
    "MetafieldResource",
    "MetafieldType",
    "OrderRisk",
    "OrderRiskRecommendation",
    "OrderRiskResource",
    "PaymentsTransaction",
    "PaymentsTransactionResource",
    "PaymentsTransactionType",
    "PaymentsTransactionsListOptions",
    "Payout",
    "PayoutResource",
    "PayoutStatus",
    "PayoutsListOptions",
    "ReadOnlyResource",
    "Resource",
]
