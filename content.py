"""Static copy and option lists shown on the public pages and admin forms."""

ORG_NAME = "Okwulora Helps"

HOME_STATS = [
    {"value": "500+", "label": "Families Helped"},
    {"value": "₦100M+", "label": "Funds Distributed"},
    {"value": "95%", "label": "Direct to Aid"},
    {"value": "24/7", "label": "Support Available"},
]

VALUES = [
    {
        "title": "Compassionate Care",
        "description": "We believe every person deserves access to quality healthcare and support during their most challenging times.",
    },
    {
        "title": "Transparent Operations",
        "description": "95% of every donation goes directly to aid, with full transparency in how funds are allocated and distributed.",
    },
    {
        "title": "Community Focus",
        "description": "Building a network of support that connects those in need with resources, volunteers, and caring communities.",
    },
]

TESTIMONIALS = [
    {
        "name": "Ngozi Eze",
        "location": "Lagos",
        "quote": "When my daughter needed emergency surgery, Okwulora Helps stepped in immediately. Their support changed our lives forever.",
        "rating": 5,
    },
    {
        "name": "Tunde Bakare",
        "location": "Ibadan",
        "quote": "The compassionate team helped us navigate the complex medical system and provided both financial and emotional support.",
        "rating": 5,
    },
    {
        "name": "Amina Sule",
        "location": "Kano",
        "quote": "Thanks to Okwulora Helps, my father received the treatment he needed. Their dedication to helping families is remarkable.",
        "rating": 5,
    },
]

PRESET_AMOUNTS = [5000, 10000, 25000, 50000, 100000, 250000]

DONATION_IMPACT = [
    {"amount": "₦5,000", "text": "Provides basic medical supplies for one family"},
    {"amount": "₦10,000", "text": "Covers emergency medication for a chronic condition"},
    {"amount": "₦25,000", "text": "Funds a critical medical consultation"},
    {"amount": "₦50,000+", "text": "Supports a family through a medical emergency"},
]

STORY_CATEGORY_LABELS = {
    "surgery": "Surgery",
    "emergency": "Emergency Care",
    "chronic-conditions": "Chronic Conditions",
    "cancer": "Cancer Treatment",
    "maternity": "Maternity Care",
}

GENDER_OPTIONS = {
    "male": "Male",
    "female": "Female",
    "other": "Other",
    "prefer-not-to-say": "Prefer not to say",
}

AILMENT_OPTIONS = {
    "medical-emergency": "Medical Emergency",
    "chronic-illness": "Chronic Illness",
    "surgery": "Surgery",
    "mental-health": "Mental Health",
    "disability": "Disability Support",
    "medication": "Medication Access",
    "other": "Other",
}


def naira(amount: float) -> str:
    """Format an amount like ₦50,000 (kobo shown only when present)."""
    if float(amount).is_integer():
        return f"₦{int(amount):,}"
    return f"₦{amount:,.2f}"
