from fastapi.templating import Jinja2Templates
from .config import settings
from .services.currency import format_money

def money_filter(amount, currency_code: str | None = None) -> str:
    """A Jinja2 filter rendering an amount in the site currency."""
    return format_money(amount, currency_code or settings.CURRENCY)

# Create a single, shared Jinja2Templates instance
templates = Jinja2Templates(directory="app/templates")
# Add the custom filter to the environment
templates.env.filters["money"] = money_filter
templates.env.globals["settings"] = settings
