"""Static studio catalog: services, pricing plans and portfolio."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    summary: str
    icon: str


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    price: Optional[float]
    currency: str
    service_id: str
    tagline: str
    features: Tuple[str, ...] = field(default_factory=tuple)
    featured: bool = False

    @property
    def is_priced(self) -> bool:
        return self.price is not None


@dataclass(frozen=True)
class PortfolioItem:
    title: str
    client: str
    service_id: str
    summary: str
    year: int


SERVICES: Tuple[Service, ...] = (
    Service("web", "Web Design & Development", "Fast marketing sites, landing pages and web apps.", "🌐"),
    Service("branding", "Branding & Identity", "Logos, visual systems and brand guidelines.", "🎨"),
    Service("events", "Event Technology", "QR check-in, live displays and event microsites.", "🎟️"),
    Service("marketing", "Digital Marketing", "Campaigns, SEO and social content that converts.", "📣"),
    Service("automation", "AI & Automation", "Chatbots, CRM workflows and internal tools.", "🤖"),
    Service("other", "Something Else", "Tell us what you need and we will scope it.", "✨"),
)

PLANS: Tuple[Plan, ...] = (
    Plan(
        "starter", "Starter", 499.0, "USD", "web",
        "A polished one-page presence.",
        ("Single-page website", "Mobile-first design", "Contact form", "1 revision round"),
    ),
    Plan(
        "growth", "Growth", 1499.0, "USD", "web",
        "A full site built to bring in leads.",
        ("Up to 8 pages", "CMS integration", "SEO setup", "Analytics dashboard", "3 revision rounds"),
        featured=True,
    ),
    Plan(
        "event-pro", "Event Pro", 999.0, "USD", "events",
        "Everything a live event needs on screen and at the door.",
        ("Event microsite", "QR check-in codes", "Live feature toggles", "On-site support"),
    ),
    Plan(
        "enterprise", "Enterprise", None, "USD", "automation",
        "Custom scope, custom quote.",
        ("Dedicated team", "Integrations & automation", "Priority support", "SLA"),
    ),
)

PORTFOLIO: Tuple[PortfolioItem, ...] = (
    PortfolioItem("Eventos Live", "9LMNTS Eventos", "events", "QR-driven check-in and live feature board for a 2,000-guest festival.", 2024),
    PortfolioItem("Coastal Realty", "Coastal Realty Group", "web", "Listing site with lead capture wired into the agents' CRM.", 2024),
    PortfolioItem("Nova Coffee", "Nova Coffee Co.", "branding", "Identity refresh across packaging, signage and social.", 2023),
    PortfolioItem("LeadBot", "Internal", "automation", "Website assistant that qualifies inquiries before they reach sales.", 2025),
)

# Legacy and marketing identifiers still used in links and old inquiries.
SERVICE_ALIASES = {
    "web-development": "web",
    "web-design": "web",
    "website": "web",
    "brand": "branding",
    "brand-identity": "branding",
    "event": "events",
    "event-tech": "events",
    "eventos": "events",
    "seo": "marketing",
    "social-media": "marketing",
    "ai": "automation",
    "ai-automation": "automation",
    "chatbot": "automation",
}


def map_service_id(raw_id: Optional[str]) -> str:
    """Normalize any incoming service identifier to a catalog service id."""
    if not raw_id:
        return "other"
    key = raw_id.strip().lower().replace("_", "-").replace(" ", "-")
    if any(service.id == key for service in SERVICES):
        return key
    return SERVICE_ALIASES.get(key, "other")


def get_service(service_id: str) -> Service:
    mapped = map_service_id(service_id)
    return next(service for service in SERVICES if service.id == mapped)


def get_plan(plan_id: Optional[str]) -> Optional[Plan]:
    if not plan_id:
        return None
    return next((plan for plan in PLANS if plan.id == plan_id), None)
