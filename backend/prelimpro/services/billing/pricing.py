"""
Pricing tiers shown on the pricing page.

Price ids are the friendly aliases; checkout resolves them to real Stripe
price ids through PRICE_MAP.
"""

# Basic (Unlimited Solo): $35/mo or $290/yr
PRICE_BASIC_MONTHLY = "price_basic_monthly"
PRICE_BASIC_ANNUAL = "price_basic_annual"

# Pro (Team): $71/mo or $590/yr
PRICE_PRO_MONTHLY = "price_pro_monthly"
PRICE_PRO_ANNUAL = "price_pro_annual"

# Business (Admin tools): $131/mo or $1,030/yr
PRICE_BUSINESS_MONTHLY = "price_business_monthly"
PRICE_BUSINESS_ANNUAL = "price_business_annual"

# Pay-per-notice
PRICE_PER_NOTICE_STANDARD = "price_per_notice_standard"
PRICE_PER_NOTICE_CERTIFIED = "price_per_notice_certified"
PRICE_PER_NOTICE_PRIORITY = "price_per_notice_priority"
PRICE_PER_NOTICE_CERTIFIED_OH = "price_per_notice_certified_oh"
PRICE_PER_NOTICE_PRIORITY_OH = "price_per_notice_priority_oh"
PRICE_PER_NOTICE_PRIORITY_CERTIFIED = "price_per_notice_priority_certified"
PRICE_PER_NOTICE_PRIORITY_CERTIFIED_OH = "price_per_notice_priority_certified_oh"

SUBSCRIPTION_PRICE_IDS = (
    PRICE_BASIC_MONTHLY,
    PRICE_BASIC_ANNUAL,
    PRICE_PRO_MONTHLY,
    PRICE_PRO_ANNUAL,
    PRICE_BUSINESS_MONTHLY,
    PRICE_BUSINESS_ANNUAL,
)

PER_NOTICE_PRICE_IDS = (
    PRICE_PER_NOTICE_STANDARD,
    PRICE_PER_NOTICE_CERTIFIED,
    PRICE_PER_NOTICE_PRIORITY,
    PRICE_PER_NOTICE_CERTIFIED_OH,
    PRICE_PER_NOTICE_PRIORITY_OH,
    PRICE_PER_NOTICE_PRIORITY_CERTIFIED,
    PRICE_PER_NOTICE_PRIORITY_CERTIFIED_OH,
)

# Corporate is sold through sales, no price id
CORPORATE_CONTACT_EMAIL = "sales@premiumlien.com"
CORPORATE_PLAN = {
    "display_name": "Corporate",
    "annual_minimum_usd": 10000,
    "included_seats": 20,
    "included_notices_per_month": 200,
    "seat_price_monthly_usd": 25,
    "overage_per_notice_usd": 3,
    "pilot_cap_usd": 5000,
    "blurb": (
        "Starts at $10k/yr, includes 20 seats and 200 notices/mo; $25/seat/mo over 20; "
        "$3/notice overage; invoice, net 30/45."
    ),
}

PRICING_TIERS = [
    {
        "id": "free",
        "name": "Free",
        "monthly_price": "$0",
        "description": "3 preliminary notices per month. Mailing is pay-per-notice.",
        "features": [
            "3 notices/month included",
            "Pay-per mailing (standard/certified/priority)",
            "Basic reminders, single user",
        ],
        "is_free": True,
    },
    {
        "id": "basic",
        "name": "Basic (Solo Unlimited)",
        "monthly_price": "$35",
        "annual_price": "$290",
        "description": "Unlimited notices for solo users. Mailing is pay-per-notice.",
        "features": [
            "Unlimited notices",
            "Pay-per mailing (standard/certified/priority)",
            "Automatic reminders + push",
            "Unlimited project storage",
            "Single user",
        ],
        "price_id_monthly": PRICE_BASIC_MONTHLY,
        "price_id_annual": PRICE_BASIC_ANNUAL,
        "savings": "Save ~31% on annual",
    },
    {
        "id": "pro",
        "name": "Pro (Team + Priority)",
        "monthly_price": "$71",
        "annual_price": "$590",
        "description": "Teams up to 5 users with exports and priority support. Mailing is pay-per-notice.",
        "features": [
            "Unlimited notices",
            "Team support (up to 5 users)",
            "Export CSV/PDF",
            "Priority support",
            "Custom logo branding",
            "Pay-per mailing (standard/certified/priority)",
        ],
        "price_id_monthly": PRICE_PRO_MONTHLY,
        "price_id_annual": PRICE_PRO_ANNUAL,
        "badge": "Best for teams",
        "savings": "Save ~31% on annual",
    },
    {
        "id": "business",
        "name": "Business",
        "monthly_price": "$131",
        "annual_price": "$1,030",
        "description": "Unlimited users with admin tools and volume discounts. Mailing is pay-per-notice.",
        "features": [
            "Unlimited notices & users",
            "Admin controls, audit logs, bulk invoicing",
            "Volume discounts",
            "Priority support, onboarding assistance",
            "Pay-per mailing (standard/certified/priority)",
        ],
        "price_id_monthly": PRICE_BUSINESS_MONTHLY,
        "price_id_annual": PRICE_BUSINESS_ANNUAL,
        "badge": "Popular for ops",
        "savings": "Save ~34% on annual",
    },
    {
        "id": "corporate",
        "name": "Corporate (Enterprise)",
        "monthly_price": f"${CORPORATE_PLAN['seat_price_monthly_usd']}/seat",
        "annual_price": f"${CORPORATE_PLAN['annual_minimum_usd']}/yr min",
        "description": (
            f"Starts at ${CORPORATE_PLAN['annual_minimum_usd']}/yr with {CORPORATE_PLAN['included_seats']} seats "
            f"and {CORPORATE_PLAN['included_notices_per_month']} notices/month included."
        ),
        "features": [
            f"{CORPORATE_PLAN['included_seats']} seats included; "
            f"${CORPORATE_PLAN['seat_price_monthly_usd']}/seat/mo over bundle",
            f"{CORPORATE_PLAN['included_notices_per_month']} notices/month included; "
            f"${CORPORATE_PLAN['overage_per_notice_usd']} per extra notice",
            "SSO, audit trails, dedicated support",
            "Invoice (ACH/wire), custom SLAs, API access",
        ],
        "contact_link": (
            f"mailto:{CORPORATE_CONTACT_EMAIL}?subject=PrelimPro%20Corporate"
            f"&body=Share%20seat%20count%2C%20notice%20volume%2C%20and%20target%20start%20date."
        ),
        "badge": "Talk to sales",
    },
]
