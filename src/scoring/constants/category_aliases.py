"""
Category aliases and pricing keyword tables.

Both tables are ordered: resolution walks them top to bottom and the
first hit wins. PRICING_KEYWORDS lists "Free" before "Freemium", so a
query containing "freemium" resolves to "Free".
"""

# fmt: off
CATEGORY_ALIASES: dict = {
    "AI":          ["artificial intelligence", "machine learning", "ml", "generative", "smart"],
    "Tools":       ["apps", "applications", "software", "programs", "utilities"],
    "Inspiration": ["inspo", "ideas", "galleries", "showcase", "portfolio", "examples"],
    "Learning":    ["tutorials", "courses", "education", "educational", "training", "lessons"],
    "Templates":   ["assets", "resources", "kits", "starters", "boilerplates"],
    "Community":   ["communities", "forums", "social", "network", "networking"],
}

PRICING_KEYWORDS: dict = {
    "Free":        ["free", "gratis", "no cost", "$0", "zero cost"],
    "Freemium":    ["freemium", "free tier", "free plan", "basic free", "free version"],
    "Paid":        ["paid", "premium", "pro", "subscription", "license"],
    "Pay per use": ["pay per use", "pay-per-use", "pay as you go", "usage based", "credits"],
    "Open Source": ["open source", "opensource", "oss", "libre", "foss"],
}
# fmt: on
