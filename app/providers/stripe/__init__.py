"""Stripe provider adapter package."""

from .constants import (
	STRIPE_MAPPING_EXPRESSIONS,
	STRIPE_OBJECT_REQUIRED_FIELDS,
	StripeDisputeField,
	StripeEventType,
	StripeObjectType,
	StripeRequiredField,
)
from .mapper import StripeWebhookMapper

__all__ = [
	"STRIPE_MAPPING_EXPRESSIONS",
	"STRIPE_OBJECT_REQUIRED_FIELDS",
	"StripeDisputeField",
	"StripeEventType",
	"StripeObjectType",
	"StripeRequiredField",
	"StripeWebhookMapper",
]
