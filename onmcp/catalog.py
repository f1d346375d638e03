"""0nMCP catalog - services, categories and the derived headline stats."""

from __future__ import annotations

from dataclasses import dataclass

CATALOG_VERSION = "1.7.0"


@dataclass(frozen=True)
class Category:
    id: str
    label: str
    icon: str
    color: str


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    category: str
    description: str
    tools: int
    actions: int
    triggers: int
    color: str
    icon: str


CATEGORIES: list[Category] = [
    Category("payments", "Payments", "credit-card", "#00ff88"),
    Category("email", "Email", "mail", "#ff6b35"),
    Category("sms", "SMS", "smartphone", "#00d4ff"),
    Category("communication", "Communication", "message-circle", "#9945ff"),
    Category("ai", "AI", "sparkles", "#ff3d9a"),
    Category("database", "Database", "database", "#00ff88"),
    Category("code", "Code", "code", "#f0f0ff"),
    Category("project", "Project Mgmt", "kanban", "#5E6AD2"),
    Category("ecommerce", "E-Commerce", "shopping-cart", "#96BF47"),
    Category("crm", "CRM", "users", "#ff6b35"),
    Category("scheduling", "Scheduling", "calendar", "#006BFF"),
    Category("storage", "Storage", "hard-drive", "#00d4ff"),
    Category("support", "Support", "headphones", "#03363D"),
]

SERVICES: list[Service] = [
    Service("stripe", "Stripe", "payments", "Payment processing, customers, subscriptions, invoices", 16, 3, 5, "#635BFF", "stripe"),
    Service("sendgrid", "SendGrid", "email", "Transactional email, templates, campaigns", 8, 2, 4, "#1A82E2", "sendgrid"),
    Service("resend", "Resend", "email", "Modern email API for developers", 6, 2, 2, "#000000", "resend"),
    Service("gmail", "Gmail", "email", "Google email via OAuth", 8, 2, 3, "#EA4335", "gmail"),
    Service("twilio", "Twilio", "sms", "SMS, voice, WhatsApp messaging", 8, 2, 3, "#F22F46", "twilio"),
    Service("slack", "Slack", "communication", "Team messaging, channels, notifications", 10, 2, 3, "#4A154B", "slack"),
    Service("discord", "Discord", "communication", "Community messaging, webhooks, bots", 10, 2, 2, "#5865F2", "discord"),
    Service("zoom", "Zoom", "communication", "Video conferencing, meetings, webinars", 8, 2, 3, "#2D8CFF", "zoom"),
    Service("teams", "MS Teams", "communication", "Microsoft 365 team collaboration", 8, 2, 2, "#6264A7", "teams"),
    Service("openai", "OpenAI", "ai", "GPT, DALL-E, Whisper, embeddings", 10, 3, 2, "#10A37F", "openai"),
    Service("airtable", "Airtable", "database", "Spreadsheet-database hybrid", 9, 2, 2, "#18BFFF", "airtable"),
    Service("notion", "Notion", "database", "Pages, databases, blocks, wiki", 9, 2, 3, "#000000", "notion"),
    Service("supabase", "Supabase", "database", "PostgreSQL, auth, realtime, edge functions", 10, 2, 4, "#3ECF8E", "supabase"),
    Service("sheets", "Google Sheets", "database", "Spreadsheet CRUD and formulas", 8, 2, 2, "#34A853", "sheets"),
    Service("mongodb", "MongoDB", "database", "Document database, Atlas, aggregations", 8, 2, 2, "#47A248", "mongodb"),
    Service("github", "GitHub", "code", "Repos, PRs, issues, actions, releases", 14, 2, 6, "#f0f0ff", "github"),
    Service("linear", "Linear", "project", "Issues, cycles, projects, roadmaps", 8, 2, 3, "#5E6AD2", "linear"),
    Service("jira", "Jira", "project", "Issues, sprints, boards, Atlassian suite", 8, 2, 3, "#0052CC", "jira"),
    Service("shopify", "Shopify", "ecommerce", "Products, orders, inventory, customers", 12, 3, 5, "#96BF47", "shopify"),
    Service("hubspot", "HubSpot", "crm", "Contacts, deals, companies, marketing", 12, 3, 4, "#FF7A59", "hubspot"),
    Service("crm", "Rocket CRM", "crm", "Contacts, opportunities, calendars, social, invoices, objects across 12 modules", 245, 3, 5, "#ff6b35", "rocket"),
    Service("calendly", "Calendly", "scheduling", "Events, bookings, availability", 6, 2, 3, "#006BFF", "calendly"),
    Service("gcal", "Google Calendar", "scheduling", "Events, reminders, scheduling", 8, 2, 3, "#4285F4", "gcal"),
    Service("gdrive", "Google Drive", "storage", "Files, folders, sharing, search", 8, 2, 2, "#4285F4", "gdrive"),
    Service("onedrive", "OneDrive", "storage", "Microsoft cloud file storage", 6, 1, 2, "#0078D4", "onedrive"),
    Service("zendesk", "Zendesk", "support", "Tickets, customers, knowledge base", 8, 2, 3, "#03363D", "zendesk"),
]


def compute_stats(
    services: list[Service] | None = None, categories: list[Category] | None = None,
) -> dict[str, int | str]:
    services = SERVICES if services is None else services
    categories = CATEGORIES if categories is None else categories

    tools = sum(s.tools for s in services)
    actions = sum(s.actions for s in services)
    triggers = sum(s.triggers for s in services)
    return {
        "services": len(services),
        "tools": tools,
        "actions": actions,
        "triggers": triggers,
        "categories": len(categories),
        "total": tools + actions + triggers,
        "version": CATALOG_VERSION,
    }


STATS = compute_stats()

BADGE_COLORS = {
    "tools": "00ff88",
    "services": "00d4ff",
    "actions": "ff6b35",
    "triggers": "9945ff",
    "total": "00ff88",
    "categories": "ff3d9a",
}
DEFAULT_BADGE_COLOR = "00ff88"


def badge(key: str) -> dict[str, int | str] | None:
    """shields.io endpoint payload for one stat, or None if unknown."""
    if key not in STATS:
        return None
    return {
        "schemaVersion": 1,
        "label": key,
        "message": str(STATS[key]),
        "color": BADGE_COLORS.get(key, DEFAULT_BADGE_COLOR),
    }
