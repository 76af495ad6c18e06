# src/contract_kit/extraction/schemas.py

"""Built-in contract schemas.

A schema ties a contract type to its extraction prompt, the fields that
decide confidence and the all-empty record used when a response cannot be
parsed.
"""

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import UnsupportedSchemaError


class ContractSchema(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    contract_type: str
    prompt_name: str
    prompt_version: str = "1.0"
    # Dotted paths navigate nested objects
    required_fields: tuple[str, ...]
    default_record: dict[str, Any]
    field_descriptions: dict[str, str] = {}

    def empty_record(self) -> dict[str, Any]:
        """A fresh copy of the default record, safe to mutate."""
        return copy.deepcopy(self.default_record)


PURCHASE_SCHEMA = ContractSchema(
    contract_type="purchase",
    prompt_name="purchase_extraction",
    required_fields=(
        "buyer",
        "seller",
        "property_legal_description",
        "offer_price",
        "important_dates.closing_date",
        "contingencies",
        "earnest_money_amount",
    ),
    default_record={
        "buyer": None,
        "seller": None,
        "property_legal_description": None,
        "offer_price": None,
        "earnest_money_amount": None,
        "important_dates": {
            "offer_date": None,
            "acceptance_deadline": None,
            "closing_date": None,
        },
        "contingencies": {
            "inspection": False,
            "financing": False,
            "appraisal": False,
            "sale_of_other_home": False,
            "other": None,
        },
        "financing_terms": {"loan_type": None, "down_payment_pct": None},
        "brokerages": {"buy_side": None, "list_side": None},
        "seller_disclosures_attached": False,
    },
    field_descriptions={
        "buyer": "Name of the buyer(s) purchasing the property",
        "seller": "Name of the seller(s) selling the property",
        "property_legal_description": "Complete legal description or address of the property",
        "offer_price": "Purchase price offered by buyer (USD)",
        "earnest_money_amount": "Earnest money deposit amount (USD)",
        "important_dates": "Critical timeline dates for the transaction",
        "contingencies": "Conditions that must be met for sale to proceed",
        "financing_terms": "Loan and down payment details",
        "brokerages": "Real estate brokerages representing each party",
        "seller_disclosures_attached": "Whether seller disclosure documents are included",
    },
)

LISTING_SCHEMA = ContractSchema(
    contract_type="listing",
    prompt_name="listing_extraction",
    required_fields=(
        "seller",
        "brokerage_name",
        "property_address",
        "list_price",
        "commission_pct",
        "expiration_date",
    ),
    default_record={
        "seller": None,
        "brokerage_name": None,
        "listing_agent": None,
        "property_address": None,
        "list_price": None,
        "commission_pct": None,
        "co_op_pct": None,
        "agreement_start_date": None,
        "expiration_date": None,
        "exclusive_or_open": "unknown",
        "mls_marketing_permission": None,
    },
    field_descriptions={
        "seller": "Property owner(s) listing the property",
        "brokerage_name": "Real estate brokerage handling the listing",
        "listing_agent": "Agent responsible for marketing the property",
        "property_address": "Full address of the property being listed",
        "list_price": "Initial asking price for the property (USD)",
        "commission_pct": "Total commission percentage",
        "co_op_pct": "Commission split offered to buyer's agent",
        "agreement_start_date": "When the listing agreement begins",
        "expiration_date": "When the listing agreement expires",
        "exclusive_or_open": "Type of listing agreement",
        "mls_marketing_permission": "Permission to market on MLS",
    },
)

LEASE_SCHEMA = ContractSchema(
    contract_type="lease",
    prompt_name="lease_extraction",
    required_fields=(
        "landlord",
        "tenant",
        "property_address",
        "lease_term_start",
        "lease_term_end",
        "monthly_rent",
    ),
    default_record={
        "landlord": None,
        "tenant": None,
        "property_address": None,
        "lease_term_start": None,
        "lease_term_end": None,
        "monthly_rent": None,
        "security_deposit": None,
        "late_fee_policy": None,
        "utilities_responsibility": None,
        "maintenance_responsibility": None,
        "pet_policy": None,
        "options_to_renew": {"has_option": False, "details": None},
    },
    field_descriptions={
        "landlord": "Property owner or management company",
        "tenant": "Person(s) renting the property",
        "property_address": "Full address of the rental property",
        "lease_term_start": "When the lease period begins",
        "lease_term_end": "When the lease period ends",
        "monthly_rent": "Monthly rental amount (USD)",
        "security_deposit": "Refundable security deposit amount (USD)",
        "late_fee_policy": "Penalties for late rent payments",
        "utilities_responsibility": "Who pays for which utilities",
        "maintenance_responsibility": "Who handles repairs and maintenance",
        "pet_policy": "Rules regarding pets in the rental",
        "options_to_renew": "Lease renewal terms and conditions",
    },
)

BUILTIN_SCHEMAS: dict[str, ContractSchema] = {
    schema.contract_type: schema
    for schema in (PURCHASE_SCHEMA, LISTING_SCHEMA, LEASE_SCHEMA)
}


def get_schema(
    contract_type: str,
    schemas: Mapping[str, ContractSchema] = BUILTIN_SCHEMAS,
) -> ContractSchema:
    try:
        return schemas[contract_type]
    except KeyError:
        raise UnsupportedSchemaError(contract_type) from None
