"""Provider adapter layer package for payment provider integration boundaries."""

from .coercion import provider_build_canonical_record, provider_coerce_amount
from .payment_provider import PaymentProvider
from .stripe import StripeWebhookMapper

__all__ = [
	"PaymentProvider",
	"StripeWebhookMapper",
	"provider_build_canonical_record",
	"provider_coerce_amount",
]
